"""
Risk client package — cache-backed, throttled access to RugCheck token risk reports.

RiskReportClient.get_or_fetch() is the public entry point; classification
helpers turn a report into display-ready levels, labels and colors.
"""

from backend_rugcheck.risk_client.cache import CacheEntry, TTLCache
from backend_rugcheck.risk_client.classification import (
    normalize_score,
    risk_explanation,
    risk_label,
    risk_level,
    risk_level_color,
    risk_score_color,
    summarize_report,
)
from backend_rugcheck.risk_client.client import RiskReportClient
from backend_rugcheck.risk_client.errors import RiskClientError, SchedulerClosedError
from backend_rugcheck.risk_client.fetcher import RugCheckAPI
from backend_rugcheck.risk_client.models import RiskSummary, TokenRiskReport, VerifyTokenParams
from backend_rugcheck.risk_client.scheduler import QueueItem, ThrottledPriorityScheduler
from backend_rugcheck.risk_client.verify import verify_token

__all__ = [
    "CacheEntry",
    "QueueItem",
    "RiskClientError",
    "RiskReportClient",
    "RiskSummary",
    "RugCheckAPI",
    "SchedulerClosedError",
    "TTLCache",
    "ThrottledPriorityScheduler",
    "TokenRiskReport",
    "VerifyTokenParams",
    "normalize_score",
    "risk_explanation",
    "risk_label",
    "risk_level",
    "risk_level_color",
    "risk_score_color",
    "summarize_report",
    "verify_token",
]
