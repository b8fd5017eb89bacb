from enum import Enum


class ExtractionStatus(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


class JobPhase(str, Enum):
    STARTED = "STARTED"
    PROCESSING = "PROCESSING"
    AGGREGATING = "AGGREGATING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class RowIssue(str, Enum):
    """Row-scoped failures. Recorded on the row, never raised past it."""

    LINK_MISSING = "LINK_MISSING"
    FETCH_FAILURE = "FETCH_FAILURE"
    EXTRACTION_FAILURE = "EXTRACTION_FAILURE"
    SCORING_SKIPPED = "SCORING_SKIPPED"
    SCORING_BACKEND_FAILURE = "SCORING_BACKEND_FAILURE"
