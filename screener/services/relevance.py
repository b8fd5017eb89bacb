"""Relevance scoring of a resume against a job description.

The model is treated as a loosely structured text generator: it is asked for a
one-line ``Rating:<int>/10 Summary:<text>`` answer and the reply is parsed with
tolerant patterns. Whatever comes back, callers always get an integer rating
in [0, 10] and a summary string; no exception leaves :meth:`RelevanceScorer.score`.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from screener.core.enums import RowIssue
from screener.core.logging import get_logger
from screener.services.llm import LLMProvider

logger = get_logger(__name__)

MIN_RATING = 0
MAX_RATING = 10
DEFAULT_MAX_CHARS = 8000
TRUNCATION_MARKER = "\n... (truncated)"

NOT_CONFIGURED_SUMMARY = "LLM not configured."
MISSING_CONTENT_SUMMARY = "Missing resume content for LLM analysis."
UNPARSED_SUMMARY = "Could not parse summary from LLM response."
API_ERROR_SUMMARY = "Failed to get LLM report due to API error."

RATING_PATTERN = re.compile(r"(?:Numeric )?Rating:\s*\*?(\d+)(?:/\d+)?", re.IGNORECASE)
SUMMARY_PATTERN = re.compile(r"(?:Summarized Report|Summary):\s*(.*)", re.IGNORECASE)


@dataclass
class ScoreResult:
    # scored: a backend call was attempted, whether or not it succeeded.
    rating: int
    summary: str
    scored: bool = False
    issue: RowIssue | None = None


@dataclass
class ParsedResponse:
    rating: int
    summary: str
    rating_valid: bool


def truncate_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER


def build_relevance_prompt(
    resume_text: str,
    job_description: str,
    *,
    max_chars: int = DEFAULT_MAX_CHARS,
) -> str:
    return (
        "Analyze the following resume content against the job description.\n"
        "Provide a numeric rating from 0 to 10 (where 0 is no match, 10 is perfect match) "
        "indicating how well the resume matches the job description.\n"
        "Also, provide a single-line summarized report explaining your rating.\n"
        "Respond with exactly one line and nothing else, in this format:\n"
        "Rating:<integer>/10 Summary:<one sentence>\n"
        'Example: "Rating:1/10 Summary:lorem ipsum"\n'
        "\n"
        "Resume Content:\n"
        f"{truncate_text(resume_text, max_chars)}\n"
        "\n"
        "Job Description:\n"
        f"{truncate_text(job_description, max_chars)}\n"
    )


class ResponseParser(ABC):
    @abstractmethod
    def parse(self, raw_text: str) -> ParsedResponse:
        raise NotImplementedError


class RegexResponseParser(ResponseParser):
    """Pulls rating and summary out of free text with two independent patterns."""

    def parse(self, raw_text: str) -> ParsedResponse:
        text = raw_text or ""
        rating = MIN_RATING
        rating_valid = False

        rating_match = RATING_PATTERN.search(text)
        if rating_match:
            digits = rating_match.group(1).lstrip("0") or "0"
            # More than two significant digits is out of range; skip int() on them.
            value = int(digits) if len(digits) <= 2 else None
            if value is not None and MIN_RATING <= value <= MAX_RATING:
                rating = value
                rating_valid = True
            else:
                logger.warning(
                    "Parsed rating is out of range, defaulting to 0",
                    extra={"extra": {"raw_rating": rating_match.group(1)[:20]}},
                )
        else:
            logger.warning("Could not find a valid integer rating in LLM response")

        summary_match = SUMMARY_PATTERN.search(text)
        summary = summary_match.group(1).strip() if summary_match else UNPARSED_SUMMARY

        return ParsedResponse(rating=rating, summary=summary, rating_valid=rating_valid)


class RelevanceScorer:
    def __init__(
        self,
        provider: LLMProvider | None,
        *,
        parser: ResponseParser | None = None,
        max_chars: int = DEFAULT_MAX_CHARS,
    ) -> None:
        self.provider = provider
        self.parser = parser or RegexResponseParser()
        self.max_chars = max_chars

    @property
    def configured(self) -> bool:
        return self.provider is not None

    async def score(self, resume_text: str | None, job_description: str) -> ScoreResult:
        if self.provider is None:
            logger.error("LLM provider is not configured, skipping relevance scoring")
            return ScoreResult(
                rating=MIN_RATING,
                summary=NOT_CONFIGURED_SUMMARY,
                issue=RowIssue.SCORING_SKIPPED,
            )

        if not resume_text:
            return ScoreResult(
                rating=MIN_RATING,
                summary=MISSING_CONTENT_SUMMARY,
                issue=RowIssue.SCORING_SKIPPED,
            )

        prompt = build_relevance_prompt(resume_text, job_description or "", max_chars=self.max_chars)
        try:
            logger.info("Calling LLM for relevance scoring", extra={"extra": {"provider": self.provider.name}})
            raw_text = await self.provider.generate(prompt)
        except Exception as exc:
            logger.error(
                "Error calling LLM provider",
                exc_info=True,
                extra={"extra": {"provider": self.provider.name, "error": str(exc)}},
            )
            return ScoreResult(
                rating=MIN_RATING,
                summary=API_ERROR_SUMMARY,
                scored=True,
                issue=RowIssue.SCORING_BACKEND_FAILURE,
            )

        logger.info("LLM response received", extra={"extra": {"response": raw_text[:300]}})
        parsed = self.parser.parse(raw_text)
        return ScoreResult(
            rating=parsed.rating,
            summary=parsed.summary,
            scored=True,
            issue=None if parsed.rating_valid else RowIssue.SCORING_BACKEND_FAILURE,
        )
