"""
Tests for the RugCheck HTTP fetcher (risk_client.fetcher.RugCheckAPI.fetch_report).

Every failure mode (transport, non-2xx, bad JSON, wrong shape) must come back
as None, never as an exception.
"""

from __future__ import annotations

import httpx
import pytest

from backend_rugcheck.risk_client.fetcher import RugCheckAPI, report_url, verify_url
from backend_rugcheck.risk_client.models import TokenRiskReport
from tests.conftest import HOLDER_ADDRESS, MINT_A, TEST_BASE_URL, RecordingTransport, report_payload


def _api(respond) -> tuple[RugCheckAPI, RecordingTransport]:
    upstream = RecordingTransport(respond)
    http = httpx.AsyncClient(transport=upstream.transport)
    return RugCheckAPI(http, base_url=TEST_BASE_URL + "/", user_agent="agent/1"), upstream


def test_urls():
    assert report_url(TEST_BASE_URL + "/", "abc") == f"{TEST_BASE_URL}/tokens/abc/report"
    assert report_url(TEST_BASE_URL, "a/b") == f"{TEST_BASE_URL}/tokens/a%2Fb/report"
    assert verify_url(TEST_BASE_URL) == f"{TEST_BASE_URL}/tokens/verify"


@pytest.mark.asyncio
async def test_fetch_report_parses_camel_case_body():
    api, upstream = _api(lambda request: httpx.Response(200, json=report_payload(extraField="kept")))

    report = await api.fetch_report(MINT_A)

    assert isinstance(report, TokenRiskReport)
    assert report.mint == MINT_A
    assert report.score_normalised == 42
    assert report.rugged is False
    assert report.risks[0].name == "Top 10 holders high ownership"
    assert report.token_meta.symbol == "SOL"
    assert report.top_holders[0].address == HOLDER_ADDRESS
    assert report.top_holders[0].ui_amount_string == "0.001"
    assert report.total_holders == 1234
    assert report.total_market_liquidity == 5000.5
    assert report.model_dump(by_alias=True)["extraField"] == "kept"

    request = upstream.requests[0]
    assert request.method == "GET"
    assert str(request.url) == f"{TEST_BASE_URL}/tokens/{MINT_A}/report"
    assert request.headers["accept"] == "application/json"
    assert request.headers["user-agent"] == "agent/1"
    await api.aclose()


@pytest.mark.asyncio
async def test_fetch_report_minimal_body():
    api, _ = _api(lambda request: httpx.Response(200, json={"score_normalised": 5}))

    report = await api.fetch_report(MINT_A)

    assert report.score_normalised == 5
    assert report.risks == []
    assert report.top_holders is None
    await api.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
async def test_fetch_report_non_2xx_returns_none(status):
    api, upstream = _api(lambda request: httpx.Response(status, text="upstream says no"))

    assert await api.fetch_report(MINT_A) is None
    assert len(upstream.requests) == 1
    await api.aclose()


@pytest.mark.asyncio
async def test_fetch_report_transport_error_returns_none():
    def respond(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api, _ = _api(respond)

    assert await api.fetch_report(MINT_A) is None
    await api.aclose()


@pytest.mark.asyncio
async def test_fetch_report_invalid_json_returns_none():
    api, _ = _api(lambda request: httpx.Response(200, text="<html>not json</html>"))

    assert await api.fetch_report(MINT_A) is None
    await api.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [[], {"rugged": True}, {"score_normalised": "high"}])
async def test_fetch_report_wrong_shape_returns_none(body):
    api, _ = _api(lambda request: httpx.Response(200, json=body))

    assert await api.fetch_report(MINT_A) is None
    await api.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw",
    [
        '{"score_normalised": NaN}',
        '{"score_normalised": Infinity}',
        '{"score_normalised": -Infinity, "risks": []}',
        '{"score_normalised": 10, "risks": [{"name": "x", "score": NaN}]}',
    ],
)
async def test_fetch_report_non_finite_numbers_return_none(raw):
    """json.loads accepts NaN/Infinity literals; such a body is malformed, not a report."""
    api, _ = _api(lambda request: httpx.Response(200, content=raw.encode(), headers={"content-type": "application/json"}))

    assert await api.fetch_report(MINT_A) is None
    await api.aclose()
