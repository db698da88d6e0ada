"""
Pytest fixtures for Backend RugCheck tests.

Fake fetchers record call order and start times and fail on re-entrant calls;
HTTP is faked with httpx.MockTransport so no test touches the network.
"""

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Callable

import httpx
import pytest

from backend_rugcheck.config import Settings

MINT_A = "So11111111111111111111111111111111111111112"
MINT_B = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
HOLDER_ADDRESS = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
TEST_BASE_URL = "https://rugcheck.test/v1"


def report_payload(mint: str = MINT_A, score_normalised: float = 42, rugged: bool = False, **extra: Any) -> dict[str, Any]:
    """RugCheck report body as the API sends it (camelCase)."""
    body: dict[str, Any] = {
        "mint": mint,
        "score": score_normalised * 10,
        "score_normalised": score_normalised,
        "rugged": rugged,
        "risks": [
            {
                "name": "Top 10 holders high ownership",
                "description": "The top 10 users hold more than 70% token supply",
                "level": "danger",
                "score": 3000,
                "value": "",
            }
        ],
        "tokenMeta": {"name": "Wrapped SOL", "symbol": "SOL"},
        "topHolders": [
            {
                "address": HOLDER_ADDRESS,
                "amount": 1000,
                "decimals": 6,
                "insider": False,
                "owner": HOLDER_ADDRESS,
                "pct": 12.5,
                "uiAmount": 0.001,
                "uiAmountString": "0.001",
            }
        ],
        "totalHolders": 1234,
        "totalMarketLiquidity": 5000.5,
    }
    body.update(extra)
    return body


class FakeClock:
    """Manually advanced wall clock for TTLCache."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """
    Async fetcher stub. responses maps key -> payload, None, or an exception to raise.
    Records call order and start times; a re-entrant call fails with AssertionError.
    """

    def __init__(self, responses: dict[str, Any] | None = None, *, default: Any = None, delay: float = 0.0) -> None:
        self.responses = responses or {}
        self.default = default
        self.delay = delay
        self.calls: list[str] = []
        self.starts: list[float] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, key: str) -> Any:
        assert self.in_flight == 0, f"re-entrant fetch for {key}"
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.calls.append(key)
        self.starts.append(time.monotonic())
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            value = self.responses.get(key, self.default)
            if isinstance(value, BaseException):
                raise value
            return value
        finally:
            self.in_flight -= 1


class RecordingTransport:
    """httpx.MockTransport handler that records requests and replays a response factory."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.respond = respond
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.content]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at a fake base URL, with no throttle delay to keep tests fast."""
    return Settings(
        rugcheck_base_url=TEST_BASE_URL,
        user_agent="BackendRugCheck/test",
        cache_ttl_sec=3600,
        throttle_delay_sec=0.0,
        http_timeout_sec=5.0,
    )


@pytest.fixture
def rugcheck_upstream() -> RecordingTransport:
    """Fake RugCheck: report for MINT_A, 404 for anything else, {ok: true} on verify."""

    def respond(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "POST" and path.endswith("/tokens/verify"):
            return httpx.Response(200, json={"ok": True})
        if path == f"/v1/tokens/{MINT_A}/report":
            return httpx.Response(200, json=report_payload(MINT_A))
        return httpx.Response(404, text="token not found")

    return RecordingTransport(respond)


@pytest.fixture
def api_client(test_settings, rugcheck_upstream):
    """
    FastAPI TestClient with a RiskReportClient wired to the fake upstream.
    Used as a context manager so every request shares one event loop (and one worker).
    """
    from fastapi.testclient import TestClient

    from backend_rugcheck.api_server.server import app
    from backend_rugcheck.risk_client import RiskReportClient

    app.state.risk_client = RiskReportClient.from_settings(test_settings, transport=rugcheck_upstream.transport)
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.state.risk_client = None
