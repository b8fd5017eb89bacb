from typing import Awaitable, Callable

from screener.agents.state import RowPipelineState
from screener.core.enums import RowIssue
from screener.services.document_fetcher import DocumentFetcher


def make_node(fetcher: DocumentFetcher) -> Callable[[RowPipelineState], Awaitable[RowPipelineState]]:
    async def fetch_document_node(state: RowPipelineState) -> RowPipelineState:
        content = await fetcher.fetch(state.get("resolved_link"))
        state["document_bytes"] = content
        if content is None:
            state.setdefault("issues", []).append(RowIssue.FETCH_FAILURE.value)
        return state

    return fetch_document_node
