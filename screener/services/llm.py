from abc import ABC, abstractmethod
from typing import Any

import httpx

from screener.core.config import Settings
from screener.core.logging import get_logger

logger = get_logger(__name__)

OPENAI_BASE_URL = "https://api.openai.com/v1"
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SCREENING_INSTRUCTIONS = (
    "You screen resumes against a job description for a recruiter. "
    "Answer with a single line: Rating:<0-10>/10 Summary:<one sentence>."
)
KEY_PREFIXES = ("sk-", "gsk_", "aiza")


class LLMProviderError(RuntimeError):
    pass


class LLMProvider(ABC):
    name = "base"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        raise NotImplementedError


class MockLLMProvider(LLMProvider):
    """Offline stand-in that always rates a resume 5/10."""

    name = "mock"

    async def generate(self, prompt: str) -> str:
        prompt_lines = [line.strip() for line in prompt.splitlines() if line.strip()]
        seed = " ".join(prompt_lines[:2])
        return f"Rating:5/10 Summary:Generated summary (mock provider): {seed[:120]}"


class HttpLLMProvider(LLMProvider):
    """Scoring backend reached over a JSON HTTP API."""

    key_env = "LLM_API_KEY"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        temperature: float,
        max_tokens: int,
        timeout_seconds: int,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError(
                f"{self.key_env} is required to score resumes with LLM_PROVIDER={self.name}"
            )
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @abstractmethod
    def request(self, prompt: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        """Return url, headers and JSON body for one scoring call."""

    @abstractmethod
    def response_text(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    async def generate(self, prompt: str) -> str:
        url, headers, payload = self.request(prompt)
        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport) as client:
            response = await client.post(url, headers=headers, json=payload)

        if response.status_code >= 400:
            raise LLMProviderError(
                f"{self.name} scoring request failed ({response.status_code}): {response.text[:300]}"
            )

        content = self.response_text(response.json())
        if not content.strip():
            raise LLMProviderError(f"{self.name} scoring response had no text")
        return content.strip()


class OpenAICompatibleLLMProvider(HttpLLMProvider):
    name = "openai"

    def request(self, prompt: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SCREENING_INSTRUCTIONS},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        return f"{self.base_url}/chat/completions", headers, payload

    def response_text(self, data: dict[str, Any]) -> str:
        choices = data.get("choices") or [{}]
        return str((choices[0].get("message") or {}).get("content") or "")


class GeminiLLMProvider(HttpLLMProvider):
    name = "gemini"
    key_env = "GEMINI_API_KEY (or LLM_API_KEY)"

    def request(self, prompt: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        payload = {
            "systemInstruction": {"parts": [{"text": SCREENING_INSTRUCTIONS}]},
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_tokens,
            },
        }
        return f"{self.base_url}/models/{self.model}:generateContent", headers, payload

    def response_text(self, data: dict[str, Any]) -> str:
        candidates = data.get("candidates") or [{}]
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(str(part.get("text", "")) for part in parts)


# provider name -> (class, default base url)
PROVIDERS: dict[str, tuple[type[HttpLLMProvider], str]] = {
    "gemini": (GeminiLLMProvider, GEMINI_BASE_URL),
    "openai": (OpenAICompatibleLLMProvider, OPENAI_BASE_URL),
    "openai_compatible": (OpenAICompatibleLLMProvider, OPENAI_BASE_URL),
    "groq": (OpenAICompatibleLLMProvider, GROQ_BASE_URL),
}


def build_llm_provider(settings: Settings) -> LLMProvider:
    """Build the process-wide scoring backend; raises ValueError when it cannot score."""
    provider = (settings.llm_provider or "gemini").strip().lower()

    if provider.startswith(KEY_PREFIXES):
        raise ValueError(
            "LLM_PROVIDER appears to contain an API key. Set LLM_PROVIDER to one of "
            f"{', '.join(sorted(PROVIDERS))} or mock and put the key in LLM_API_KEY."
        )
    if provider == "mock":
        logger.warning("Using mock LLM provider; resume ratings are not real")
        return MockLLMProvider()
    if provider not in PROVIDERS:
        raise ValueError(
            f"Unsupported LLM_PROVIDER '{provider}'. Resume scoring supports: "
            f"{', '.join(sorted(PROVIDERS))}, mock."
        )

    provider_cls, default_base_url = PROVIDERS[provider]
    base_url = settings.llm_base_url
    # An OpenAI URL left over in .env must not leak into a Groq setup.
    if not base_url or (provider == "groq" and base_url.rstrip("/") == OPENAI_BASE_URL):
        base_url = default_base_url
    return provider_cls(
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        base_url=base_url,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout_seconds=settings.llm_timeout_seconds,
    )
