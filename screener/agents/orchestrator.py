"""Runs one screening job: every row through the row pipeline, in order.

A job moves ``STARTED -> PROCESSING(i) -> AGGREGATING -> COMPLETED``. Row-level
problems never leave the row pipeline; anything else raised while iterating
moves the job to ``FAILED``, which emits an error instead of a partial report.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable

from screener.agents.graph import build_row_pipeline, run_row_pipeline
from screener.agents.nodes.finalize import STATUS_FIELD
from screener.agents.progress import ProgressSink
from screener.core.enums import ExtractionStatus, JobPhase
from screener.core.logging import get_logger
from screener.services.document_fetcher import DocumentFetcher
from screener.services.relevance import RelevanceScorer

logger = get_logger(__name__)

ANALYSING_STATUS = "analysing all resume"
CONVERTING_STATUS = "converting to csv"
FAILURE_MESSAGE = "An error occurred during backend processing. Check server logs."


@dataclass
class JobReport:
    job_id: str
    rows: list[dict[str, Any]] = field(default_factory=list)
    successful_extractions: int = 0
    successful_scorings: int = 0

    @property
    def message(self) -> str:
        return (
            f"Successfully extracted text from {self.successful_extractions} PDFs "
            f"and ran {self.successful_scorings} LLM analyses."
        )


def coerce_record(raw: Any) -> dict[str, Any]:
    if isinstance(raw, dict):
        return dict(raw)
    logger.warning("Batch row is not an object, treating it as empty", extra={"extra": {"row_type": type(raw).__name__}})
    return {}


class JobOrchestrator:
    def __init__(
        self,
        scorer: RelevanceScorer,
        fetcher: DocumentFetcher | None = None,
        *,
        identity_field: str = "email",
        link_field: str = "resume_link",
    ) -> None:
        if scorer is None:
            raise ValueError("JobOrchestrator requires a RelevanceScorer")
        self.scorer = scorer
        self.fetcher = fetcher or DocumentFetcher()
        self.identity_field = identity_field
        self.link_field = link_field

    def _transition(self, job_id: str, phase: JobPhase, **details: Any) -> JobPhase:
        logger.info("Job phase transition", extra={"extra": {"job_id": job_id, "phase": phase.value, **details}})
        return phase

    async def run_job(
        self,
        records: Iterable[Any],
        job_description: str,
        progress: ProgressSink,
        *,
        job_id: str | None = None,
    ) -> JobReport | None:
        job_id = job_id or str(uuid.uuid4())
        batch = [coerce_record(raw) for raw in records]
        total = len(batch)
        report = JobReport(job_id=job_id)

        self._transition(job_id, JobPhase.STARTED, rows=total)
        await progress.update(
            f"Received data with {total} rows. Initializing analysis process...",
            status=ANALYSING_STATUS,
        )

        try:
            pipeline = build_row_pipeline(
                scorer=self.scorer,
                fetcher=self.fetcher,
                progress=progress,
                identity_field=self.identity_field,
                link_field=self.link_field,
            )
            for index, record in enumerate(batch):
                self._transition(job_id, JobPhase.PROCESSING, index=index)
                state = await run_row_pipeline(
                    pipeline,
                    job_id=job_id,
                    record=record,
                    job_description=job_description or "",
                    index=index,
                    total=total,
                )
                row = state["result"]
                report.rows.append(row)
                if row[STATUS_FIELD] == ExtractionStatus.SUCCESS.value:
                    report.successful_extractions += 1
                if state.get("scored"):
                    report.successful_scorings += 1

            self._transition(job_id, JobPhase.AGGREGATING, rows=len(report.rows))
            await progress.update(
                "All resumes processed. Generating final CSV...",
                status=CONVERTING_STATUS,
            )
        except Exception as exc:
            self._transition(job_id, JobPhase.FAILED, error=str(exc))
            logger.exception("Error during job processing", extra={"extra": {"job_id": job_id}})
            await progress.error(FAILURE_MESSAGE, str(exc))
            return None

        self._transition(
            job_id,
            JobPhase.COMPLETED,
            successful_extractions=report.successful_extractions,
            successful_scorings=report.successful_scorings,
        )
        await progress.complete(report.rows, report.message)
        return report
