from abc import ABC, abstractmethod
from typing import Any

from screener.core.logging import get_logger

logger = get_logger(__name__)


class ProgressSink(ABC):
    """Where a job narrates itself. Implementations must not raise on a gone consumer."""

    @abstractmethod
    async def update(self, report: str, *, status: str | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    async def complete(self, final_data: list[dict[str, Any]], report: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def error(self, message: str, error: str) -> None:
        raise NotImplementedError


class LoggingProgressSink(ProgressSink):
    """Sends progress to the log. Used by the offline CLI."""

    def __init__(self, job_name: str = "offline") -> None:
        self.job_name = job_name
        self.final_data: list[dict[str, Any]] | None = None
        self.failure: dict[str, str] | None = None

    async def update(self, report: str, *, status: str | None = None) -> None:
        logger.info(report, extra={"extra": {"job": self.job_name, "status": status}})

    async def complete(self, final_data: list[dict[str, Any]], report: str) -> None:
        self.final_data = final_data
        logger.info(report, extra={"extra": {"job": self.job_name, "rows": len(final_data)}})

    async def error(self, message: str, error: str) -> None:
        self.failure = {"message": message, "error": error}
        logger.error(message, extra={"extra": {"job": self.job_name, "error": error}})
