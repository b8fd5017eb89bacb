from typing import Any, Awaitable, Callable

from screener.agents.progress import ProgressSink
from screener.agents.state import RowPipelineState
from screener.core.enums import ExtractionStatus
from screener.core.logging import get_logger

logger = get_logger(__name__)

STATUS_FIELD = "pdfExtractionStatus"
RATING_FIELD = "Rating"
SUMMARY_FIELD = "Summary"


def build_row_result(record: dict[str, Any], *, text: str | None, rating: int, summary: str) -> dict[str, Any]:
    status = ExtractionStatus.SUCCESS if text and text.strip() else ExtractionStatus.FAILED
    return {
        **record,
        STATUS_FIELD: status.value,
        RATING_FIELD: rating,
        SUMMARY_FIELD: summary,
    }


def make_node(progress: ProgressSink) -> Callable[[RowPipelineState], Awaitable[RowPipelineState]]:
    async def finalize_node(state: RowPipelineState) -> RowPipelineState:
        rating = int(state.get("rating", 0))
        state["result"] = build_row_result(
            state.get("record") or {},
            text=state.get("text"),
            rating=rating,
            summary=state.get("summary", ""),
        )
        logger.info(
            "Completed processing for row",
            extra={
                "extra": {
                    "job_id": state.get("job_id"),
                    "index": state.get("index"),
                    "identity": state.get("identity"),
                    "rating": rating,
                    "issues": state.get("issues", []),
                }
            },
        )
        await progress.update(f"Completed processing for {state['identity']}. Rating: {rating}")
        return state

    return finalize_node
