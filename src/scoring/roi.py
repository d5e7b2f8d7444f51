from __future__ import annotations

from .base import CriterionResult, ScoreContext
from .penalties import clamp01


class AnnualROIScorer:
    key = "roi"
    label = "Annual ROI"

    def applies(self, context: ScoreContext) -> bool:
        return context.policy.enabled(self.key) and context.tolerances.min_roi is not None

    def score(self, context: ScoreContext) -> CriterionResult:
        weight = context.get_weight(self.key)
        annual_roi = context.metrics.annual_roi
        min_roi = float(context.tolerances.min_roi)

        if annual_roi >= min_roi:
            earned = weight
            status = "met"
        else:
            ratio = annual_roi / min_roi if min_roi > 0 else 0.0
            earned = clamp01(ratio) * weight
            status = "below"

        return CriterionResult(
            key=self.key,
            label=self.label,
            max=weight,
            earned=earned,
            status=status,
            observed=annual_roi,
            limit=min_roi,
        )


__all__ = ["AnnualROIScorer"]
