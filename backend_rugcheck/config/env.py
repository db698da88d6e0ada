"""
Environment variable loading for Backend RugCheck.

- RUGCHECK_BASE_URL: RugCheck API root (default: https://api.rugcheck.xyz/v1)
- RUGCHECK_USER_AGENT: User-Agent sent upstream (default: BackendRugCheck/<version>)
- RUGCHECK_CACHE_TTL_SEC / RUGCHECK_THROTTLE_DELAY_SEC / RUGCHECK_HTTP_TIMEOUT_SEC: client tuning
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from backend_rugcheck import __version__

# Project root: config is backend_rugcheck/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_RUGCHECK_BASE_URL = "https://api.rugcheck.xyz/v1"
DEFAULT_USER_AGENT = f"BackendRugCheck/{__version__}"


def load_rugcheck_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env wins."""
    load_dotenv(_ENV_PATH, override=False)


def get_rugcheck_base_url() -> str:
    """
    Return RUGCHECK_BASE_URL without trailing slash.
    Default: public RugCheck v1 API.
    """
    load_rugcheck_env()
    url = (os.getenv("RUGCHECK_BASE_URL") or "").strip()
    return (url or DEFAULT_RUGCHECK_BASE_URL).rstrip("/")


def get_user_agent() -> str:
    load_rugcheck_env()
    return (os.getenv("RUGCHECK_USER_AGENT") or "").strip() or DEFAULT_USER_AGENT


def get_float_env(name: str, default: float) -> float:
    """
    Parse a float env var. Empty or missing -> default.
    Raises ValueError on garbage or negative values so misconfiguration fails at startup.
    """
    load_rugcheck_env()
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value
