import json
import logging
import sys

import pytest

from screener.core.logging import JsonFormatter, resolve_level, setup_logging


def _record(message: str, **kwargs) -> logging.LogRecord:
    logger = logging.getLogger("screener.test")
    return logger.makeRecord("screener.test", logging.WARNING, __file__, 1, message, (), kwargs.pop("exc_info", None), **kwargs)


def test_json_formatter_merges_structured_fields_and_service():
    record = _record("Failed to fetch document", extra={"extra": {"status_code": 404, "url": "https://x/y.pdf"}})

    payload = json.loads(JsonFormatter(service="Resume Screener").format(record))

    assert payload["message"] == "Failed to fetch document"
    assert payload["level"] == "WARNING"
    assert payload["service"] == "Resume Screener"
    assert payload["status_code"] == 404
    assert payload["url"] == "https://x/y.pdf"


def test_json_formatter_includes_traceback():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record("Error during job processing", exc_info=sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in payload["exc_info"]
    assert "service" not in payload


def test_resolve_level_accepts_names_and_rejects_unknown():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_setup_logging_quiets_transport_loggers():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("info", service="svc")

        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
