"""
Main entrypoint: FastAPI server for cached, rate-limited RugCheck risk reports.

Env: RUGCHECK_BASE_URL, RUGCHECK_CACHE_TTL_SEC, RUGCHECK_THROTTLE_DELAY_SEC,
RUGCHECK_HTTP_TIMEOUT_SEC, API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT.

Equivalent: uvicorn backend_rugcheck.api_server.server:app --host 0.0.0.0 --port 8000
"""

# Configure structured JSON logging before other imports that may log
from backend_rugcheck.rugcheck_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the API server in the main thread; Ctrl+C / SIGTERM shut it down."""
    import uvicorn

    from backend_rugcheck.config import get_settings

    settings = get_settings()
    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        rugcheck_base_url=settings.rugcheck_base_url,
    )
    uvicorn.run(
        "backend_rugcheck.api_server.server:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
