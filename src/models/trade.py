from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Suggestion(str, Enum):
    """Suitability bucket derived from the normalized score."""

    CONSERVATIVE = "Conservative"
    NEUTRAL = "Neutral"
    AGGRESSIVE = "Aggressive"


class Tolerances(BaseModel):
    """Risk tolerances supplied by the caller; unset fields are not scored."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False, frozen=True)

    max_dte: Optional[float] = Field(default=None, alias="maxDTE")
    min_roi: Optional[float] = Field(default=None, alias="minROI")
    max_beta: Optional[float] = Field(default=None, alias="maxBeta")
    max_delta: Optional[float] = Field(default=None, alias="maxDelta")


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            return datetime.fromisoformat(text).date()
    raise ValueError("Unsupported date format")


class Trade(BaseModel):
    """Options trade candidate as submitted for evaluation."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False, frozen=True)

    symbol: str
    trade_date: date = Field(alias="tradeDate")
    expiration_date: date = Field(alias="expirationDate")
    option_type: Literal["put", "call"] = Field(alias="type")
    strike: float
    bid: float
    beta: float
    delta: float
    support_level: Optional[float] = Field(default=None, alias="supportLevel")

    @field_validator("trade_date", "expiration_date", mode="before")
    @classmethod
    def parse_dates(cls, value: Any) -> date:
        return _parse_date(value)

    @field_validator("option_type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class ScoreComponent(BaseModel):
    """One line of the score breakdown."""

    key: str
    label: str
    max: float
    earned: float
    note: str = ""


class EvaluatedTrade(BaseModel):
    """Trade fields plus derived metrics, scoring ledger and bucket."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    trade_date: date = Field(alias="tradeDate")
    expiration_date: date = Field(alias="expirationDate")
    option_type: Literal["put", "call"] = Field(alias="type")
    strike: float
    bid: float
    beta: float
    delta: float
    support_level: Optional[float] = Field(default=None, alias="supportLevel")

    dte: int = Field(ge=1)
    premium: float
    breakeven: float
    annual_roi: float = Field(alias="annualROI")
    collateral_at_risk: float = Field(alias="collateralAtRisk")
    support_variance_pct: Optional[float] = Field(default=None, alias="supportVariancePct")

    hard_fail: bool = Field(alias="hardFail")
    breakdown: List[ScoreComponent] = Field(default_factory=list)
    total_possible: float = Field(alias="totalPossible")
    points_before_penalties: float = Field(alias="pointsBeforePenalties")
    penalties_applied: float = Field(alias="penaltiesApplied")
    points_final: float = Field(alias="pointsFinal")
    score: float = Field(ge=0.0, le=100.0)
    suggestion: Suggestion


class TradeError(BaseModel):
    """Placeholder for a trade that could not be evaluated."""

    index: int
    symbol: Optional[str] = None
    error: str


__all__ = [
    "EvaluatedTrade",
    "ScoreComponent",
    "Suggestion",
    "Tolerances",
    "Trade",
    "TradeError",
]
