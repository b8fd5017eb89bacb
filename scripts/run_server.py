import uvicorn

from screener.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "screener.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
