from __future__ import annotations

from .base import CriterionResult, ScoreContext


class CollateralScorer:
    """Tiered credit on the cash tied up by the contract."""

    key = "collateral"
    label = "Collateral at Risk"

    def applies(self, context: ScoreContext) -> bool:
        return context.policy.enabled(self.key)

    def score(self, context: ScoreContext) -> CriterionResult:
        weight = context.get_weight(self.key)
        tiers = context.policy.collateral_tiers
        collateral = context.metrics.collateral_at_risk

        if collateral < tiers.first_cut:
            status, credit = "low", tiers.credits[0]
        elif collateral <= tiers.second_cut:
            status, credit = "moderate", tiers.credits[1]
        else:
            status, credit = "high", tiers.credits[2]

        return CriterionResult(
            key=self.key,
            label=self.label,
            max=weight,
            earned=weight * credit,
            status=status,
            observed=collateral,
            cuts=(tiers.first_cut, tiers.second_cut),
        )


__all__ = ["CollateralScorer"]
