import asyncio
import json

import httpx
import pytest

from screener.core.config import Settings
from screener.services.llm import (
    GeminiLLMProvider,
    LLMProviderError,
    MockLLMProvider,
    OpenAICompatibleLLMProvider,
    build_llm_provider,
)


def test_build_llm_provider_mock():
    settings = Settings(llm_provider="mock")
    provider = build_llm_provider(settings)
    assert isinstance(provider, MockLLMProvider)


def test_build_llm_provider_requires_gemini_key():
    settings = Settings(llm_provider="gemini", llm_api_key="")
    with pytest.raises(ValueError) as exc:
        build_llm_provider(settings)
    assert "GEMINI_API_KEY" in str(exc.value)


def test_build_llm_provider_rejects_key_in_provider_field():
    bad_value = "gsk_example_secret_value"
    settings = Settings(llm_provider=bad_value, llm_api_key="")
    with pytest.raises(ValueError) as exc:
        build_llm_provider(settings)

    message = str(exc.value)
    assert "API key" in message
    assert bad_value not in message


def test_build_llm_provider_groq_uses_default_compatible_base_url():
    settings = Settings(
        llm_provider="groq",
        llm_api_key="dummy-key",
        llm_model="llama-3.3-70b-versatile",
    )
    provider = build_llm_provider(settings)

    assert isinstance(provider, OpenAICompatibleLLMProvider)
    assert provider.base_url == "https://api.groq.com/openai/v1"


def test_gemini_provider_joins_candidate_parts():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-goog-api-key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"text": "Rating:6/10 "}, {"text": "Summary:Decent"}]}}]},
        )

    provider = GeminiLLMProvider(
        api_key="secret",
        model="gemini-2.5-flash",
        base_url="https://generativelanguage.googleapis.com/v1beta",
        temperature=0.2,
        max_tokens=256,
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),
    )

    assert asyncio.run(provider.generate("hello")) == "Rating:6/10 Summary:Decent"
    assert seen["url"].endswith("/models/gemini-2.5-flash:generateContent")
    assert seen["key"] == "secret"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "hello"


def test_openai_provider_raises_on_error_status():
    provider = OpenAICompatibleLLMProvider(
        api_key="secret",
        model="gpt-4o-mini",
        base_url="https://api.openai.com/v1/",
        temperature=0.2,
        max_tokens=64,
        timeout_seconds=5,
        transport=httpx.MockTransport(lambda request: httpx.Response(429, text="rate limited")),
    )

    with pytest.raises(LLMProviderError) as exc:
        asyncio.run(provider.generate("hello"))
    assert "429" in str(exc.value)


def test_build_llm_provider_rejects_unknown_provider():
    with pytest.raises(ValueError) as exc:
        build_llm_provider(Settings(llm_provider="anthropic-ish", llm_api_key="k"))
    assert "Unsupported LLM_PROVIDER" in str(exc.value)


def test_openai_provider_sends_screening_instructions():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": " Rating:4/10 Summary:Thin "}}]})

    provider = OpenAICompatibleLLMProvider(
        api_key="secret",
        model="gpt-4o-mini",
        base_url="https://llm.internal.example/v1",
        temperature=0.0,
        max_tokens=64,
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),
    )

    assert asyncio.run(provider.generate("resume vs job")) == "Rating:4/10 Summary:Thin"
    assert seen["url"] == "https://llm.internal.example/v1/chat/completions"
    system, user = seen["body"]["messages"]
    assert "Rating:<0-10>/10" in system["content"]
    assert user["content"] == "resume vs job"
