from typing import Callable

from screener.agents.state import RowPipelineState
from screener.core.enums import RowIssue
from screener.core.logging import get_logger
from screener.services.text_extractor import extract_pdf_text

logger = get_logger(__name__)


def make_node() -> Callable[[RowPipelineState], RowPipelineState]:
    def extract_text_node(state: RowPipelineState) -> RowPipelineState:
        text = extract_pdf_text(state.get("document_bytes") or b"", source=state.get("resolved_link") or "")
        state["text"] = text
        # Bytes are not needed past this point.
        state["document_bytes"] = None
        if text is None:
            state.setdefault("issues", []).append(RowIssue.EXTRACTION_FAILURE.value)
            logger.warning(
                "Could not extract text content from PDF",
                extra={"extra": {"identity": state.get("identity")}},
            )
        return state

    return extract_text_node
