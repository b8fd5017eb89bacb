from . import (
    extract_text,
    fetch_document,
    finalize,
    intake,
    relevance_scorer,
    resolve_link,
)

__all__ = [
    "extract_text",
    "fetch_document",
    "finalize",
    "intake",
    "relevance_scorer",
    "resolve_link",
]
