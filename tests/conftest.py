from typing import Any

import httpx
import pytest

from screener.agents.progress import ProgressSink
from screener.services.llm import LLMProvider


def build_pdf(text: str) -> bytes:
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(out)


class RecordingSink(ProgressSink):
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def update(self, report: str, *, status: str | None = None) -> None:
        payload = {"report": report}
        if status is not None:
            payload["status"] = status
        self.events.append(("processingUpdate", payload))

    async def complete(self, final_data: list[dict[str, Any]], report: str) -> None:
        self.events.append(("processingComplete", {"finalData": final_data, "report": report}))

    async def error(self, message: str, error: str) -> None:
        self.events.append(("processingError", {"message": message, "error": error}))

    def reports(self) -> list[str]:
        return [payload["report"] for event, payload in self.events if event == "processingUpdate"]

    def named(self, event: str) -> list[dict[str, Any]]:
        return [payload for name, payload in self.events if name == event]


class ScriptedLLMProvider(LLMProvider):
    name = "scripted"

    def __init__(self, response: str = "Rating:8/10 Summary:Strong match", error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def document_transport(routes: dict[str, Any]) -> httpx.MockTransport:
    """Serve canned responses by URL substring; an exception value is raised for that URL."""
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        calls.append(url)
        for fragment, outcome in routes.items():
            if fragment in url:
                if isinstance(outcome, Exception):
                    raise outcome
                if isinstance(outcome, int):
                    return httpx.Response(outcome, text="nope")
                return httpx.Response(200, content=outcome)
        return httpx.Response(404, text="not found")

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


@pytest.fixture
def pdf_bytes():
    return build_pdf


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def scripted_provider():
    return ScriptedLLMProvider


@pytest.fixture
def make_transport():
    return document_transport
