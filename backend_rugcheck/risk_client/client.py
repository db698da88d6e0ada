"""
Query facade: the single entry point for risk report lookups.

get_or_fetch() serves fresh cache hits without touching the scheduler;
misses are queued behind the throttled worker. One client instance per
process (or per test) owns its cache, scheduler and HTTP client; there is
no module-level state.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

import httpx

from backend_rugcheck.config.settings import DEFAULT_THROTTLE_DELAY_SEC, Settings, get_settings
from backend_rugcheck.risk_client.cache import TTLCache
from backend_rugcheck.risk_client.errors import RiskClientError
from backend_rugcheck.risk_client.fetcher import RugCheckAPI
from backend_rugcheck.risk_client.models import VerifyTokenParams
from backend_rugcheck.risk_client.scheduler import Fetcher, ThrottledPriorityScheduler
from backend_rugcheck.risk_client.verify import verify_token
from backend_rugcheck.rugcheck_logging import get_logger

logger = get_logger(__name__)


class RiskReportClient:
    """Cache-backed, rate-limited risk report client."""

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        cache: TTLCache | None = None,
        throttle_delay_sec: float = DEFAULT_THROTTLE_DELAY_SEC,
        api: RugCheckAPI | None = None,
    ) -> None:
        self.cache = cache if cache is not None else TTLCache()
        self.scheduler = ThrottledPriorityScheduler(
            fetcher,
            self.cache,
            throttle_delay_sec=throttle_delay_sec,
        )
        self._api = api

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RiskReportClient:
        """Production wiring: RugCheck over httpx with env-driven TTL, throttle and timeout."""
        settings = settings or get_settings()
        http = httpx.AsyncClient(timeout=settings.http_timeout_sec, transport=transport)
        api = RugCheckAPI(http, base_url=settings.rugcheck_base_url, user_agent=settings.user_agent)
        logger.info(
            "risk_client_configured",
            base_url=settings.rugcheck_base_url,
            cache_ttl_sec=settings.cache_ttl_sec,
            throttle_delay_sec=settings.throttle_delay_sec,
        )
        return cls(
            api.fetch_report,
            cache=TTLCache(settings.cache_ttl_sec),
            throttle_delay_sec=settings.throttle_delay_sec,
            api=api,
        )

    def get_or_fetch(self, mint: str, priority: bool = False) -> asyncio.Future:
        """
        Return a future for mint's report (None when upstream has no data).

        A fresh cache hit comes back as an already-completed future; nothing
        is queued and no upstream call is made. Must be called from a running
        event loop.
        """
        payload, found = self.cache.get(mint)
        if found:
            logger.debug("risk_cache_hit", mint=mint)
            fut = asyncio.get_running_loop().create_future()
            fut.set_result(payload)
            return fut
        return self.scheduler.enqueue(mint, priority)

    async def verify_token(self, params: VerifyTokenParams | Mapping[str, Any]) -> dict[str, Any] | None:
        """Submit a verification request; bypasses the cache and the queue."""
        if self._api is None:
            raise RiskClientError("verify_token needs a client built with a RugCheck API (use from_settings)")
        return await verify_token(self._api, params)

    async def aclose(self) -> None:
        await self.scheduler.aclose()
        if self._api is not None:
            await self._api.aclose()

    async def __aenter__(self) -> RiskReportClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
