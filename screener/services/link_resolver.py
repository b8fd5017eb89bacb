import re

from screener.core.logging import get_logger

logger = get_logger(__name__)

GOOGLE_DRIVE_PATTERN = re.compile(
    r"(?:https?://(?:www\.)?drive\.google\.com/(?:file/d/|open\?id=))([a-zA-Z0-9_-]+)"
)
GOOGLE_DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={file_id}"


def extract_drive_file_id(link: str) -> str | None:
    match = GOOGLE_DRIVE_PATTERN.search(link or "")
    if not match:
        return None
    return match.group(1)


def resolve_document_link(link: str) -> str:
    """Rewrite share links into direct-download links; pass anything else through."""
    file_id = extract_drive_file_id(link)
    if file_id:
        resolved = GOOGLE_DRIVE_DOWNLOAD_URL.format(file_id=file_id)
        logger.info("Converted Google Drive link to direct download", extra={"extra": {"url": resolved}})
        return resolved

    logger.warning(
        "No Google Drive file id in link, fetching original link",
        extra={"extra": {"url": (link or "")[:80]}},
    )
    return link
