import io

from pypdf import PdfReader

from screener.core.logging import get_logger

logger = get_logger(__name__)


def extract_pdf_text(content: bytes, *, source: str = "") -> str | None:
    """Return the concatenated page text, or ``None`` when nothing usable comes out."""
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except Exception as exc:
        logger.error(
            "Error extracting PDF text",
            extra={"extra": {"source": source[:50], "error": str(exc)}},
        )
        return None

    text = "\n".join(page for page in pages if page)
    if not text.strip():
        logger.warning("PDF yielded no meaningful text", extra={"extra": {"source": source[:50]}})
        return None

    logger.info(
        "Extracted text from PDF",
        extra={"extra": {"source": source[:50], "pages": len(pages), "chars": len(text)}},
    )
    return text
