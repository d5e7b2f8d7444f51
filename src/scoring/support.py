from __future__ import annotations

from .base import CriterionResult, ScoreContext


class SupportVarianceScorer:
    """Tiered credit on how far support sits from a put's strike."""

    key = "support"
    label = "Support Variance %"

    def applies(self, context: ScoreContext) -> bool:
        return context.policy.enabled(self.key) and context.metrics.support_variance_pct is not None

    def score(self, context: ScoreContext) -> CriterionResult:
        weight = context.get_weight(self.key)
        tiers = context.policy.support_tiers
        variance = float(context.metrics.support_variance_pct)

        if variance >= tiers.first_cut:
            status, credit = "strong", tiers.credits[0]
        elif variance >= tiers.second_cut:
            status, credit = "moderate", tiers.credits[1]
        else:
            status, credit = "weak", tiers.credits[2]

        return CriterionResult(
            key=self.key,
            label=self.label,
            max=weight,
            earned=weight * credit,
            status=status,
            observed=variance,
            cuts=(tiers.first_cut, tiers.second_cut),
        )


__all__ = ["SupportVarianceScorer"]
