from typing import Any

from langgraph.graph import END, StateGraph

from screener.agents.nodes import (
    extract_text,
    fetch_document,
    finalize,
    intake,
    relevance_scorer,
    resolve_link,
)
from screener.agents.progress import ProgressSink
from screener.agents.state import RowPipelineState
from screener.services.document_fetcher import DocumentFetcher
from screener.services.relevance import RelevanceScorer


def _route_after_intake(state: RowPipelineState) -> str:
    if state.get("document_link"):
        return "resolve_link"
    return "scorer"


def _route_after_fetch(state: RowPipelineState) -> str:
    if state.get("document_bytes"):
        return "extract_text"
    return "scorer"


def build_row_pipeline(
    *,
    scorer: RelevanceScorer,
    fetcher: DocumentFetcher,
    progress: ProgressSink,
    identity_field: str = "email",
    link_field: str = "resume_link",
):
    graph = StateGraph(RowPipelineState)

    graph.add_node(
        "intake",
        intake.make_node(progress, identity_field=identity_field, link_field=link_field),
    )
    graph.add_node("resolve_link", resolve_link.make_node())
    graph.add_node("fetch_document", fetch_document.make_node(fetcher))
    graph.add_node("extract_text", extract_text.make_node())
    graph.add_node("scorer", relevance_scorer.make_node(scorer, progress))
    graph.add_node("finalize", finalize.make_node(progress))

    graph.set_entry_point("intake")
    graph.add_conditional_edges(
        "intake",
        _route_after_intake,
        {
            "resolve_link": "resolve_link",
            "scorer": "scorer",
        },
    )
    graph.add_edge("resolve_link", "fetch_document")
    graph.add_conditional_edges(
        "fetch_document",
        _route_after_fetch,
        {
            "extract_text": "extract_text",
            "scorer": "scorer",
        },
    )
    graph.add_edge("extract_text", "scorer")
    graph.add_edge("scorer", "finalize")
    graph.add_edge("finalize", END)

    return graph.compile()


async def run_row_pipeline(
    pipeline,
    *,
    job_id: str,
    record: dict[str, Any],
    job_description: str,
    index: int,
    total: int,
) -> RowPipelineState:
    initial_state: RowPipelineState = {
        "job_id": job_id,
        "index": index,
        "total": total,
        "record": dict(record),
        "job_description": job_description,
        "text": None,
        "issues": [],
    }
    return await pipeline.ainvoke(initial_state)
