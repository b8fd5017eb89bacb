from typing import Callable

from screener.agents.state import RowPipelineState
from screener.services.link_resolver import resolve_document_link


def make_node() -> Callable[[RowPipelineState], RowPipelineState]:
    def resolve_link_node(state: RowPipelineState) -> RowPipelineState:
        state["resolved_link"] = resolve_document_link(state.get("document_link") or "")
        return state

    return resolve_link_node
