"""Conversion of full-precision evaluations into output records."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from src.models.trade import EvaluatedTrade, ScoreComponent

from .base import CriterionResult
from .notes import render_note

ROI_DECIMALS = 4
SCORE_DECIMALS = 1
LEDGER_DECIMALS = 2


def round_half_up(value: float, decimals: int) -> float:
    """Round exact ties away from zero instead of to even."""

    # Doubles this large have no fractional digits left to round.
    if abs(value) >= 2**52:
        return value
    return float(Decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP))


def build_breakdown(results: Iterable[CriterionResult]) -> List[ScoreComponent]:
    return [
        ScoreComponent(
            key=result.key,
            label=result.label,
            max=result.max,
            earned=result.earned,
            note=render_note(result),
        )
        for result in results
    ]


def to_evaluated_trade(evaluation) -> EvaluatedTrade:
    """Round the ledger and attach notes; the only place output precision is applied."""

    metrics = evaluation.metrics
    ledger = evaluation.ledger
    return EvaluatedTrade(
        **evaluation.trade.model_dump(),
        dte=metrics.dte,
        premium=metrics.premium,
        breakeven=metrics.breakeven,
        annual_roi=round_half_up(metrics.annual_roi, ROI_DECIMALS),
        collateral_at_risk=metrics.collateral_at_risk,
        support_variance_pct=metrics.support_variance_pct,
        hard_fail=evaluation.hard_fail,
        breakdown=build_breakdown(ledger.results),
        total_possible=ledger.total_possible,
        points_before_penalties=round_half_up(ledger.points, LEDGER_DECIMALS),
        penalties_applied=round_half_up(evaluation.penalties_applied, LEDGER_DECIMALS),
        points_final=round_half_up(evaluation.points_final, LEDGER_DECIMALS),
        score=round_half_up(evaluation.score, SCORE_DECIMALS),
        suggestion=evaluation.suggestion,
    )


__all__ = ["LEDGER_DECIMALS", "ROI_DECIMALS", "SCORE_DECIMALS", "build_breakdown", "round_half_up", "to_evaluated_trade"]
