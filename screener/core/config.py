from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Resume Screener"
    environment: str = "dev"
    debug: bool = False
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = Field(default=5000, validation_alias=AliasChoices("API_PORT", "PORT"))
    cors_allowed_origins: str = "*"
    max_http_buffer_size: int = 100_000_000

    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.5-flash"
    llm_api_key: str = Field(default="", validation_alias=AliasChoices("LLM_API_KEY", "GEMINI_API_KEY"))
    llm_base_url: str = ""
    llm_temperature: float = 0.2
    llm_max_tokens: int = 1024
    llm_timeout_seconds: int = 45

    document_fetch_timeout_seconds: float = 10.0
    prompt_max_chars: int = 8000

    # Column names expected in each uploaded CSV row.
    identity_field: str = "email"
    document_link_field: str = "resume_link"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
