from typing import Awaitable, Callable

from screener.agents.progress import ProgressSink
from screener.agents.state import RowPipelineState
from screener.core.enums import RowIssue
from screener.services.relevance import MIN_RATING, RelevanceScorer

SKIPPED_SUMMARY = "LLM analysis skipped due to no extracted PDF text."


def make_node(
    scorer: RelevanceScorer,
    progress: ProgressSink,
) -> Callable[[RowPipelineState], Awaitable[RowPipelineState]]:
    async def scorer_node(state: RowPipelineState) -> RowPipelineState:
        text = state.get("text")
        issues = state.setdefault("issues", [])

        # An unconfigured scorer answers without any backend call, so every
        # row reports the configuration problem instead of a generic skip.
        if (text and text.strip()) or not scorer.configured:
            if scorer.configured:
                await progress.update(
                    f"Analyzing resume {state['identity']} with {scorer.provider.name} LLM..."
                )
            result = await scorer.score(text, state.get("job_description") or "")
            state["rating"] = result.rating
            state["summary"] = result.summary
            state["scored"] = result.scored
            if result.issue is not None:
                issues.append(result.issue.value)
            return state

        state["rating"] = MIN_RATING
        state["summary"] = SKIPPED_SUMMARY
        state["scored"] = False
        issues.append(RowIssue.SCORING_SKIPPED.value)
        return state

    return scorer_node
