from typing import Any, Awaitable, Callable

from screener.agents.progress import ProgressSink
from screener.agents.state import RowPipelineState
from screener.core.enums import RowIssue
from screener.core.logging import get_logger

logger = get_logger(__name__)


def row_identity(record: dict[str, Any], index: int, *, identity_field: str = "email") -> str:
    value = record.get(identity_field)
    if isinstance(value, str) and value.strip():
        return value.strip()
    if value not in (None, "") and not isinstance(value, str):
        return str(value)
    return f"NoEmail_{index}"


def document_link_of(record: dict[str, Any], *, link_field: str = "resume_link") -> str | None:
    # Non-string link values (numbers, lists, nested objects) count as missing.
    value = record.get(link_field)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def make_node(
    progress: ProgressSink,
    *,
    identity_field: str,
    link_field: str,
) -> Callable[[RowPipelineState], Awaitable[RowPipelineState]]:
    async def intake_node(state: RowPipelineState) -> RowPipelineState:
        index = state["index"]
        record = state.get("record") or {}
        identity = row_identity(record, index, identity_field=identity_field)
        link = document_link_of(record, link_field=link_field)

        state["identity"] = identity
        state["document_link"] = link
        state.setdefault("issues", [])

        await progress.update(f"Processing resume {index + 1}/{state['total']} (Email: {identity})...")

        if link:
            await progress.update(f"Extracting PDF from URL for {identity}...")
        else:
            state["issues"].append(RowIssue.LINK_MISSING.value)
            logger.warning("No PDF URL found, skipping PDF extraction", extra={"extra": {"identity": identity}})
            await progress.update(f"No PDF URL for {identity}. Skipping PDF extraction.")
        return state

    return intake_node
