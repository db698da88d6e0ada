"""
Wire models for the RugCheck API.

Field names follow Python style; aliases match the camelCase JSON the API
sends and expects. Unknown upstream fields are kept (extra="allow") so a
cached report round-trips without losing data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RiskLevel = Literal["low", "medium", "high", "critical"]


class _WireModel(BaseModel):
    # NaN and Infinity are valid to json.loads but not to JSON
    model_config = ConfigDict(populate_by_name=True, extra="allow", allow_inf_nan=False)


class RiskFactor(_WireModel):
    """One entry of report.risks, in upstream order."""

    name: str
    description: str = ""
    level: str = ""
    score: float = 0
    value: str = ""


class TokenMeta(_WireModel):
    name: str = ""
    symbol: str = ""


class TopHolder(_WireModel):
    address: str
    amount: float = 0
    decimals: int = 0
    insider: bool = False
    owner: str = ""
    pct: float = 0
    ui_amount: float = Field(0, alias="uiAmount")
    ui_amount_string: str = Field("", alias="uiAmountString")


class TokenRiskReport(_WireModel):
    """GET /tokens/{mint}/report body. The cache and scheduler never look inside it."""

    score: float = 0
    score_normalised: float = Field(..., description="Normalised risk score; clamp to 0–100 before display")
    risks: list[RiskFactor] = Field(default_factory=list)
    rugged: bool = False
    mint: str = ""
    token_meta: TokenMeta | None = Field(None, alias="tokenMeta")
    top_holders: list[TopHolder] | None = Field(None, alias="topHolders")
    total_holders: int | None = Field(None, alias="totalHolders")
    total_market_liquidity: float | None = Field(None, alias="totalMarketLiquidity")


class VerificationData(_WireModel):
    description: str
    data_integrity_accepted: bool = Field(False, alias="dataIntegrityAccepted")
    terms_accepted: bool = Field(False, alias="termsAccepted")
    sol_domain: str | None = Field(None, alias="solDomain")
    links: dict[str, str] | None = None


class VerifyTokenParams(_WireModel):
    """POST /tokens/verify body."""

    mint: str
    payer: str = Field(..., description="Wallet paying for verification")
    signature: str = Field(..., description="Signature from the payer wallet")
    data: VerificationData

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class RiskFactorSummary(BaseModel):
    name: str
    description: str
    level: str
    color: str


class HolderSummary(BaseModel):
    address: str = Field(..., description="Shortened address (first 8 … last 8)")
    pct: float
    bar_width_pct: float = Field(..., ge=0, le=100)
    insider: bool = False


class RiskSummary(BaseModel):
    """Display-ready view of a TokenRiskReport."""

    mint: str
    score: int = Field(..., ge=0, le=100, description="score_normalised clamped to 0–100 and rounded")
    level: RiskLevel
    label: str = Field(..., description="'Low Risk' … 'Critical Risk', or 'RUGGED'")
    color: str
    rugged: bool
    explanation: str
    risks: list[RiskFactorSummary] = Field(default_factory=list)
    top_holders: list[HolderSummary] = Field(default_factory=list)
    total_holders: int | None = None
