"""Criteria scored against a caller-supplied maximum (delta, DTE, beta)."""

from __future__ import annotations

from typing import Optional

from .base import CriterionResult, ScoreContext
from .penalties import exceedance_severity, heavy_penalty


class CeilingScorer:
    """Full credit at or under the ceiling, convex falloff above it."""

    key = ""
    label = ""
    tolerance_field = ""

    def tolerance(self, context: ScoreContext) -> Optional[float]:
        return getattr(context.tolerances, self.tolerance_field)

    def observed(self, context: ScoreContext) -> float:
        raise NotImplementedError

    def applies(self, context: ScoreContext) -> bool:
        tolerance = self.tolerance(context)
        return context.policy.enabled(self.key) and tolerance is not None and tolerance > 0

    def score(self, context: ScoreContext) -> CriterionResult:
        weight = context.get_weight(self.key)
        tolerance = float(self.tolerance(context))
        value = self.observed(context)

        if value <= tolerance:
            return CriterionResult(
                key=self.key,
                label=self.label,
                max=weight,
                earned=weight,
                status="within",
                observed=value,
                limit=tolerance,
            )

        factor = heavy_penalty(value, tolerance, context.policy.falloff_exponent)
        return CriterionResult(
            key=self.key,
            label=self.label,
            max=weight,
            earned=weight * factor,
            status="exceeded",
            observed=value,
            limit=tolerance,
            severity=exceedance_severity(value / tolerance),
        )


class DeltaScorer(CeilingScorer):
    key = "delta"
    label = "Delta"
    tolerance_field = "max_delta"

    def observed(self, context: ScoreContext) -> float:
        return context.trade.delta


class DTEScorer(CeilingScorer):
    key = "dte"
    label = "DTE"
    tolerance_field = "max_dte"

    def observed(self, context: ScoreContext) -> float:
        return float(context.metrics.dte)


class BetaScorer(CeilingScorer):
    key = "beta"
    label = "Beta"
    tolerance_field = "max_beta"

    def observed(self, context: ScoreContext) -> float:
        return context.trade.beta


__all__ = ["BetaScorer", "CeilingScorer", "DTEScorer", "DeltaScorer"]
