import pytest
from fastapi.testclient import TestClient

from screener.api.main import READY_MESSAGE, build_http_app, create_app
from screener.core.config import Settings
from screener.services.llm import MockLLMProvider


def test_any_path_returns_plaintext_acknowledgement():
    client = TestClient(build_http_app(Settings(llm_provider="mock")))

    for method, path in [("get", "/"), ("post", "/anything"), ("get", "/deep/path?x=1")]:
        response = getattr(client, method)(path)
        assert response.status_code == 200
        assert response.text == READY_MESSAGE
        assert response.headers["content-type"].startswith("text/plain")


def test_healthz_reports_service():
    client = TestClient(build_http_app(Settings(app_name="Resume Screener")))

    assert client.get("/healthz").json() == {"status": "ok", "service": "Resume Screener"}


def test_create_app_refuses_to_start_without_credential():
    with pytest.raises(ValueError):
        create_app(Settings(llm_provider="gemini", llm_api_key=""))


def test_create_app_serves_plaintext_through_socket_wrapper():
    app = create_app(Settings(llm_provider="mock"), provider=MockLLMProvider())
    client = TestClient(app)

    response = client.get("/")
    assert response.status_code == 200
    assert response.text == READY_MESSAGE
