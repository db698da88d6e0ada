"""
FastAPI router: GET /tokens/{mint}/report, GET /tokens/{mint}/summary, POST /tokens/verify.

Reports come through the app's RiskReportClient: fresh cache hits return
immediately, misses wait their turn behind the throttled worker. "No data"
from upstream is a 404, never a 5xx.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field
from solders.pubkey import Pubkey

from backend_rugcheck.risk_client import RiskReportClient, RiskSummary, TokenRiskReport, summarize_report
from backend_rugcheck.risk_client.models import VerifyTokenParams
from backend_rugcheck.risk_client.verify import check_verify_params
from backend_rugcheck.rugcheck_logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/tokens", tags=["risk-report"])

NO_DATA_DETAIL = "No risk data available"


class VerifyTokenResponse(BaseModel):
    ok: bool = Field(..., description="Upstream acceptance flag")


def get_risk_client(request: Request) -> RiskReportClient:
    """Dependency: the process-wide client created in the app lifespan."""
    client = getattr(request.app.state, "risk_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Risk client not initialised")
    return client


def _validate_mint(mint: str) -> str:
    mint = mint.strip()
    if not mint:
        raise HTTPException(status_code=400, detail="mint must be non-empty")
    try:
        Pubkey.from_string(mint)
    except Exception as e:
        raise HTTPException(status_code=400, detail="Invalid Solana mint address") from e
    return mint


async def _load_report(client: RiskReportClient, mint: str, priority: bool) -> TokenRiskReport:
    mint = _validate_mint(mint)
    report = await client.get_or_fetch(mint, priority=priority)
    if report is None:
        logger.info("risk_report_not_found", mint=mint)
        raise HTTPException(status_code=404, detail=NO_DATA_DETAIL)
    return report


@router.get("/{mint}/report")
async def get_token_report(
    mint: str,
    priority: bool = Query(False, description="Serve ahead of queued background lookups"),
    client: RiskReportClient = Depends(get_risk_client),
) -> dict[str, Any]:
    """Raw RugCheck report (camelCase, as upstream sends it)."""
    report = await _load_report(client, mint, priority)
    return report.model_dump(by_alias=True, exclude_none=True)


@router.get("/{mint}/summary", response_model=RiskSummary)
async def get_token_summary(
    mint: str,
    priority: bool = Query(False, description="Serve ahead of queued background lookups"),
    client: RiskReportClient = Depends(get_risk_client),
) -> RiskSummary:
    """Display-ready summary: clamped score, level, label, color, factors, top holders."""
    report = await _load_report(client, mint, priority)
    return summarize_report(report)


@router.post("/verify", response_model=VerifyTokenResponse)
async def submit_verification(
    body: dict[str, Any],
    client: RiskReportClient = Depends(get_risk_client),
) -> VerifyTokenResponse:
    """
    Forward a verification request to RugCheck. Rejected with 400 (no upstream call)
    when fields are missing or the acknowledgements are not accepted; 502 when
    RugCheck fails.
    """
    params: VerifyTokenParams | None = check_verify_params(body)
    if params is None:
        raise HTTPException(status_code=400, detail="Verification request rejected: missing fields or terms not accepted")
    _validate_mint(params.mint)
    result = await client.verify_token(params)
    if result is None:
        raise HTTPException(status_code=502, detail="Verification submission failed")
    return VerifyTokenResponse(ok=bool(result.get("ok")))
