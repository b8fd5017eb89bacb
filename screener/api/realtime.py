from typing import Any

import socketio
from pydantic import ValidationError

from screener.agents.orchestrator import JobOrchestrator
from screener.agents.progress import ProgressSink
from screener.api.schemas import (
    ProcessingComplete,
    ProcessingError,
    ProcessingUpdate,
    StartProcessingRequest,
)
from screener.core.config import Settings
from screener.core.logging import get_logger

logger = get_logger(__name__)

NAMESPACE = "/"
INVALID_PAYLOAD_MESSAGE = "Invalid startProcessing payload."


class SocketProgressSink(ProgressSink):
    """Emits job events to one Socket.IO session; silent once the session is gone."""

    def __init__(self, sio: socketio.AsyncServer, sid: str, *, namespace: str = NAMESPACE) -> None:
        self.sio = sio
        self.sid = sid
        self.namespace = namespace

    async def _emit(self, event: str, payload: dict[str, Any]) -> None:
        if not self.sio.manager.is_connected(self.sid, self.namespace):
            logger.info("Session disconnected, dropping event", extra={"extra": {"sid": self.sid, "event": event}})
            return
        await self.sio.emit(event, payload, to=self.sid, namespace=self.namespace)

    async def update(self, report: str, *, status: str | None = None) -> None:
        payload = ProcessingUpdate(status=status, report=report).model_dump(exclude_none=True)
        await self._emit("processingUpdate", payload)

    async def complete(self, final_data: list[dict[str, Any]], report: str) -> None:
        await self._emit("processingComplete", ProcessingComplete(finalData=final_data, report=report).model_dump())

    async def error(self, message: str, error: str) -> None:
        await self._emit("processingError", ProcessingError(message=message, error=error).model_dump())


def build_socket_server(orchestrator: JobOrchestrator, settings: Settings) -> socketio.AsyncServer:
    origins = settings.cors_allowed_origins
    sio = socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins="*" if origins.strip() == "*" else [o.strip() for o in origins.split(",") if o.strip()],
        max_http_buffer_size=settings.max_http_buffer_size,
    )

    @sio.event
    async def connect(sid, environ, auth=None):
        logger.info("Socket.IO client connected", extra={"extra": {"sid": sid}})

    @sio.event
    async def disconnect(sid, *args):
        logger.info("Socket.IO client disconnected", extra={"extra": {"sid": sid}})

    @sio.on("startProcessing")
    async def start_processing(sid, data):
        logger.info("Processing started for client", extra={"extra": {"sid": sid}})
        sink = SocketProgressSink(sio, sid)
        try:
            request = StartProcessingRequest.model_validate(data or {})
        except ValidationError as exc:
            logger.warning("Rejected startProcessing payload", extra={"extra": {"sid": sid, "error": str(exc)}})
            await sink.error(INVALID_PAYLOAD_MESSAGE, str(exc))
            return

        report = await orchestrator.run_job(request.csvData, request.txtData, sink, job_id=sid)
        if report is not None:
            logger.info("Processing complete and final data sent", extra={"extra": {"sid": sid}})

    return sio
