"""
RugCheck HTTP client — the only I/O boundary of the risk client.

fetch_report() is the scheduler's Fetcher: it never raises for transport
errors, non-2xx responses or malformed bodies. All of those are logged and
returned as None ("no data"), which the scheduler does not cache.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from backend_rugcheck.config.env import DEFAULT_RUGCHECK_BASE_URL, DEFAULT_USER_AGENT
from backend_rugcheck.risk_client.models import TokenRiskReport
from backend_rugcheck.rugcheck_logging import get_logger

logger = get_logger(__name__)

# Cap on upstream error bodies copied into logs
_MAX_ERROR_BODY_CHARS = 500


def report_url(base_url: str, mint: str) -> str:
    return f"{base_url.rstrip('/')}/tokens/{quote(mint, safe='')}/report"


def verify_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/tokens/verify"


class RugCheckAPI:
    """Thin async wrapper over the RugCheck REST API using a shared httpx.AsyncClient."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        base_url: str = DEFAULT_RUGCHECK_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    def headers(self, *, json_body: bool = False) -> dict[str, str]:
        headers = {"accept": "application/json", "User-Agent": self.user_agent}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def fetch_report(self, mint: str) -> TokenRiskReport | None:
        """GET /tokens/{mint}/report. Returns the parsed report or None on any failure."""
        endpoint = report_url(self.base_url, mint)
        logger.debug("rugcheck_fetch_started", mint=mint, endpoint=endpoint)
        try:
            resp = await self.http.get(endpoint, headers=self.headers())
        except httpx.HTTPError as e:
            logger.warning("rugcheck_fetch_transport_error", mint=mint, error=str(e))
            return None
        if not resp.is_success:
            logger.warning(
                "rugcheck_fetch_http_error",
                mint=mint,
                status_code=resp.status_code,
                body=resp.text[:_MAX_ERROR_BODY_CHARS],
            )
            return None
        try:
            report = TokenRiskReport.model_validate(resp.json())
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            logger.warning("rugcheck_fetch_malformed_body", mint=mint, error=str(e)[:_MAX_ERROR_BODY_CHARS])
            return None
        logger.info(
            "rugcheck_report_fetched",
            mint=mint,
            score_normalised=report.score_normalised,
            rugged=report.rugged,
            risk_count=len(report.risks),
        )
        return report

    async def aclose(self) -> None:
        await self.http.aclose()
