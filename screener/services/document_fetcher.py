import asyncio

import httpx

from screener.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
USER_AGENT = "Mozilla/5.0 (compatible; ResumeScreener/1.0)"


def _url_prefix(url: str, *, max_chars: int = 50) -> str:
    return url if len(url) <= max_chars else f"{url[:max_chars]}..."


class DocumentFetcher:
    """Downloads raw document bytes. Every failure comes back as ``None``.

    ``timeout_seconds`` bounds the whole download, headers and body together;
    httpx's own timeout only bounds each individual socket operation.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def _download(self, link: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=self.transport,
        ) as client:
            return await client.get(link)

    async def fetch(self, link: str | None) -> bytes | None:
        if not link:
            logger.warning("Document link is empty, skipping fetch")
            return None

        logger.info("Fetching document", extra={"extra": {"url": _url_prefix(link)}})
        try:
            response = await asyncio.wait_for(self._download(link), timeout=self.timeout_seconds)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.error(
                "Timed out fetching document",
                extra={"extra": {"url": _url_prefix(link), "timeout_seconds": self.timeout_seconds}},
            )
            return None
        except httpx.HTTPError as exc:
            logger.error(
                "Error fetching document",
                extra={"extra": {"url": _url_prefix(link), "error": str(exc)}},
            )
            return None

        if not response.is_success:
            logger.error(
                "Failed to fetch document",
                extra={
                    "extra": {
                        "url": _url_prefix(link),
                        "status_code": response.status_code,
                        "reason": response.reason_phrase,
                    }
                },
            )
            return None
        return response.content
