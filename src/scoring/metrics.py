"""Derived metrics for a single trade, computed before any scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.models.trade import Trade

from .errors import ComputationFault

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class TradeMetrics:
    dte: int
    premium: float
    breakeven: float
    annual_roi: float
    collateral_at_risk: float
    support_variance_pct: Optional[float] = None


def days_to_expiration(trade_date: date, expiration_date: date) -> int:
    """Whole calendar days between the dates, never less than one."""

    return max(1, (expiration_date - trade_date).days)


def annualized_roi(bid: float, strike: float, dte: int) -> float:
    """Premium yield on strike scaled to a year, as a decimal fraction."""

    if strike <= 0:
        return 0.0
    return (bid / strike) * (DAYS_PER_YEAR / dte)


def support_variance_pct(trade: Trade) -> Optional[float]:
    """Percent distance from strike down to support; puts with support only."""

    if trade.option_type != "put" or trade.support_level is None or trade.strike <= 0:
        return None
    return ((trade.support_level - trade.strike) / trade.strike) * 100


def derive_metrics(trade: Trade, contract_multiplier: int = 100) -> TradeMetrics:
    dte = days_to_expiration(trade.trade_date, trade.expiration_date)
    if trade.option_type == "put":
        breakeven = trade.strike - trade.bid
    else:
        breakeven = trade.strike + trade.bid

    metrics = TradeMetrics(
        dte=dte,
        premium=trade.bid * contract_multiplier,
        breakeven=breakeven,
        annual_roi=annualized_roi(trade.bid, trade.strike, dte),
        collateral_at_risk=trade.strike * contract_multiplier,
        support_variance_pct=support_variance_pct(trade),
    )
    _ensure_finite(metrics)
    return metrics


def _ensure_finite(metrics: TradeMetrics) -> None:
    for name in ("premium", "breakeven", "annual_roi", "collateral_at_risk", "support_variance_pct"):
        value = getattr(metrics, name)
        if value is not None and not math.isfinite(value):
            raise ComputationFault(name, value)


__all__ = [
    "DAYS_PER_YEAR",
    "TradeMetrics",
    "annualized_roi",
    "days_to_expiration",
    "derive_metrics",
    "support_variance_pct",
]
