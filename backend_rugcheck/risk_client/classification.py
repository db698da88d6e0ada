"""
Risk score classification: level buckets, display colors, labels.

Pure functions, no state, no I/O. Thresholds on the normalised score (0–100):
< 30 low, < 60 medium, < 80 high, otherwise critical. A boundary value goes
to the higher bucket (30 is medium).
"""

from __future__ import annotations

import math

from backend_rugcheck.risk_client.models import (
    HolderSummary,
    RiskFactorSummary,
    RiskLevel,
    RiskSummary,
    TokenRiskReport,
)

LOW_MAX = 30
MEDIUM_MAX = 60
HIGH_MAX = 80

LEVEL_COLORS: dict[str, str] = {
    "low": "#4CAF50",
    "medium": "#FFC107",
    "high": "#FF9800",
    "critical": "#F44336",
}
UNKNOWN_LEVEL_COLOR = "#999999"

LEVEL_LABELS: dict[str, str] = {
    "low": "Low Risk",
    "medium": "Medium Risk",
    "high": "High Risk",
    "critical": "Critical Risk",
}
RUGGED_LABEL = "RUGGED"

LEVEL_EXPLANATIONS: dict[str, str] = {
    "low": (
        "This token has a low risk score. It shows strong security indicators "
        "and appears to have legitimate tokenomics."
    ),
    "medium": (
        "This token has a medium risk score. While it shows some positive signs, "
        "there are potential concerns that should be evaluated carefully."
    ),
    "high": (
        "This token has a high risk score. Multiple risk factors have been identified "
        "that could indicate potential issues."
    ),
    "critical": (
        "This token has a critical risk score. Significant red flags have been detected "
        "that suggest high risk of loss."
    ),
}
RUGGED_EXPLANATION = (
    "This token has been identified as rugged. This means the project has likely been "
    "abandoned or was a scam. Trading is not recommended."
)

MAX_TOP_HOLDERS = 5


def risk_level(score: float) -> RiskLevel:
    if score < LOW_MAX:
        return "low"
    if score < MEDIUM_MAX:
        return "medium"
    if score < HIGH_MAX:
        return "high"
    return "critical"


def risk_score_color(score: float) -> str:
    """Hex color for a normalised score."""
    return LEVEL_COLORS[risk_level(score)]


def risk_level_color(level: str) -> str:
    """Hex color for a level name; upstream factor levels arrive in any case. Unknown -> grey."""
    return LEVEL_COLORS.get((level or "").strip().lower(), UNKNOWN_LEVEL_COLOR)


def normalize_score(score: float) -> int:
    """Clamp to 0–100 and round half up, as shown on the score badge. NaN -> 0."""
    if math.isnan(score):
        return 0
    return int(math.floor(min(100.0, max(0.0, score)) + 0.5))


def risk_label(score: float) -> str:
    return LEVEL_LABELS[risk_level(score)]


def risk_explanation(score: float, rugged: bool = False) -> str:
    if rugged:
        return RUGGED_EXPLANATION
    return LEVEL_EXPLANATIONS[risk_level(score)]


def shorten_address(address: str, keep: int = 8) -> str:
    if len(address) <= keep * 2:
        return address
    return f"{address[:keep]}...{address[-keep:]}"


def summarize_report(report: TokenRiskReport) -> RiskSummary:
    """Build the display view: clamped score, level, label, color, factors, top 5 holders."""
    score = normalize_score(report.score_normalised)
    holders = [
        HolderSummary(
            address=shorten_address(h.address),
            pct=round(h.pct, 2),
            bar_width_pct=min(100.0, max(0.0, h.pct * 100)),
            insider=h.insider,
        )
        for h in (report.top_holders or [])[:MAX_TOP_HOLDERS]
    ]
    return RiskSummary(
        mint=report.mint,
        score=score,
        level=risk_level(score),
        label=RUGGED_LABEL if report.rugged else risk_label(score),
        color=risk_score_color(score),
        rugged=report.rugged,
        explanation=risk_explanation(score, report.rugged),
        risks=[
            RiskFactorSummary(
                name=r.name,
                description=r.description,
                level=r.level.upper(),
                color=risk_level_color(r.level),
            )
            for r in report.risks
        ],
        top_holders=holders,
        total_holders=report.total_holders,
    )
