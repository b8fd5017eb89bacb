from typing import Any, TypedDict


class RowPipelineState(TypedDict, total=False):
    job_id: str
    index: int
    total: int
    record: dict[str, Any]
    job_description: str

    identity: str
    document_link: str | None
    resolved_link: str | None
    document_bytes: bytes | None
    text: str | None

    rating: int
    summary: str
    scored: bool
    issues: list[str]

    result: dict[str, Any]
