import socketio
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from screener.agents.orchestrator import JobOrchestrator
from screener.api.realtime import build_socket_server
from screener.core.config import Settings, get_settings
from screener.core.logging import get_logger, setup_logging
from screener.services.document_fetcher import DocumentFetcher
from screener.services.llm import LLMProvider, build_llm_provider
from screener.services.relevance import RelevanceScorer

logger = get_logger(__name__)

READY_MESSAGE = "Backend server is running. WebSocket (Socket.IO) endpoint available."


def build_orchestrator(settings: Settings, provider: LLMProvider) -> JobOrchestrator:
    scorer = RelevanceScorer(provider, max_chars=settings.prompt_max_chars)
    fetcher = DocumentFetcher(timeout_seconds=settings.document_fetch_timeout_seconds)
    return JobOrchestrator(
        scorer,
        fetcher,
        identity_field=settings.identity_field,
        link_field=settings.document_link_field,
    )


def build_http_app(settings: Settings) -> FastAPI:
    api = FastAPI(title=settings.app_name)

    @api.get("/healthz")
    def healthz():
        return {"status": "ok", "service": settings.app_name}

    @api.api_route(
        "/{path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
        response_class=PlainTextResponse,
    )
    def ready(path: str = ""):
        return READY_MESSAGE

    return api


def create_app(settings: Settings | None = None, provider: LLMProvider | None = None) -> socketio.ASGIApp:
    settings = settings or get_settings()
    setup_logging(settings.log_level, service=settings.app_name)

    if provider is None:
        try:
            provider = build_llm_provider(settings)
        except ValueError:
            logger.critical("Scoring backend is not configured; refusing to start", exc_info=True)
            raise

    orchestrator = build_orchestrator(settings, provider)
    sio = build_socket_server(orchestrator, settings)
    api = build_http_app(settings)
    logger.info(
        "Backend Socket.IO server configured",
        extra={"extra": {"host": settings.api_host, "port": settings.api_port, "llm_provider": provider.name}},
    )
    return socketio.ASGIApp(sio, other_asgi_app=api)
