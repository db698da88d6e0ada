"""
Backend RugCheck API Python client example.

Uses httpx. Two ways to get a report:
- over HTTP from a running server (RugCheckServiceClient),
- in-process with the throttled, cached RiskReportClient.

Usage:
    from docs.python_sdk_example import RugCheckServiceClient
    client = RugCheckServiceClient("http://localhost:8000")
    report = client.get_report("So11111111111111111111111111111111111111112")
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from backend_rugcheck.risk_client import RiskReportClient, summarize_report


class RugCheckServiceClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: httpx.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class RugCheckServiceClient:
    """Client for the Backend RugCheck HTTP API."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(base_url=self.base_url, timeout=timeout)

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None, json: dict[str, Any] | None = None) -> httpx.Response:
        resp = self._http.request(method, path, params=params, json=json)
        if not resp.is_success:
            is_json = resp.headers.get("content-type", "").startswith("application/json")
            detail = resp.json().get("detail", resp.text) if is_json else resp.text
            raise RugCheckServiceClientError(f"API error: {detail}", status_code=resp.status_code, response=resp)
        return resp

    def get_report(self, mint: str, priority: bool = False) -> dict[str, Any]:
        """Raw RugCheck report for a token mint."""
        return self._request("GET", f"/tokens/{mint}/report", params={"priority": priority}).json()

    def get_summary(self, mint: str, priority: bool = False) -> dict[str, Any]:
        """Display-ready risk summary for a token mint."""
        return self._request("GET", f"/tokens/{mint}/summary", params={"priority": priority}).json()

    def verify(self, params: dict[str, Any]) -> dict[str, Any]:
        """Submit a token for verification (both acknowledgements must be true)."""
        return self._request("POST", "/tokens/verify", json=params).json()

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health").json()

    def close(self) -> None:
        self._http.close()


async def _in_process_example(mints: list[str]) -> None:
    async with RiskReportClient.from_settings() as client:
        reports = await asyncio.gather(*[client.get_or_fetch(m) for m in mints])
        for mint, report in zip(mints, reports):
            if report is None:
                print(mint, "no risk data available")
                continue
            summary = summarize_report(report)
            print(mint, summary.score, summary.label)


if __name__ == "__main__":
    asyncio.run(_in_process_example(["So11111111111111111111111111111111111111112"]))
