"""
Application settings and environment configuration.

Responsibilities:
- Load configuration from environment variables and the project .env file.
- Validate tuning values and provide defaults for everything.
- Expose typed settings (RugCheck URL, cache TTL, throttle delay, API host/port)
  for use across the risk client and the API server.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass

from backend_rugcheck.config.env import (
    get_float_env,
    get_rugcheck_base_url,
    get_user_agent,
    load_rugcheck_env,
)

# Reports older than one hour are refetched
DEFAULT_CACHE_TTL_SEC = 60 * 60
# Minimum gap between one upstream call finishing and the next starting
DEFAULT_THROTTLE_DELAY_SEC = 0.5
DEFAULT_HTTP_TIMEOUT_SEC = 15.0


@dataclass(frozen=True)
class Settings:
    """Typed view of the environment."""

    rugcheck_base_url: str
    user_agent: str
    cache_ttl_sec: float = DEFAULT_CACHE_TTL_SEC
    throttle_delay_sec: float = DEFAULT_THROTTLE_DELAY_SEC
    http_timeout_sec: float = DEFAULT_HTTP_TIMEOUT_SEC
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the current application settings (cached; call get_settings.cache_clear()
    after changing the environment).

    Raises:
        ValueError: if a numeric env var is malformed or negative.
    """
    load_rugcheck_env()
    return Settings(
        rugcheck_base_url=get_rugcheck_base_url(),
        user_agent=get_user_agent(),
        cache_ttl_sec=get_float_env("RUGCHECK_CACHE_TTL_SEC", DEFAULT_CACHE_TTL_SEC),
        throttle_delay_sec=get_float_env("RUGCHECK_THROTTLE_DELAY_SEC", DEFAULT_THROTTLE_DELAY_SEC),
        http_timeout_sec=get_float_env("RUGCHECK_HTTP_TIMEOUT_SEC", DEFAULT_HTTP_TIMEOUT_SEC),
        api_host=os.getenv("API_HOST", "0.0.0.0").strip() or "0.0.0.0",
        api_port=int(os.getenv("API_PORT", "8000").strip() or "8000"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
