"""Resolved scoring policy shared by every criterion scorer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .config import merge_config
from .errors import InvalidPolicy

KNOWN_CRITERIA = ("roi", "delta", "dte", "beta", "collateral", "support")


@dataclass(frozen=True)
class TierTable:
    """Two thresholds splitting a metric into three credit tiers."""

    first_cut: float
    second_cut: float
    credits: Tuple[float, float, float]


@dataclass(frozen=True)
class ScoringPolicy:
    criteria: Tuple[str, ...]
    weights: Mapping[str, float]
    falloff_exponent: float = 2.0
    contract_multiplier: int = 100
    hard_fail_enabled: bool = True
    default_min_roi: float = 0.30
    max_penalty_points: float = 15.0
    collateral_tiers: TierTable = field(default_factory=lambda: TierTable(20000.0, 50000.0, (1.0, 0.5, 0.2)))
    support_tiers: TierTable = field(default_factory=lambda: TierTable(10.0, 5.0, (1.0, 0.5, 0.2)))
    conservative_min: float = 90.0
    neutral_min: float = 70.0
    preset: str = "standard"

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> "ScoringPolicy":
        """Build a policy from a (possibly partial) config mapping."""

        resolved = merge_config(dict(config or {}))
        criteria = tuple(resolved["criteria"])
        unknown = [key for key in criteria if key not in KNOWN_CRITERIA]
        if unknown:
            raise InvalidPolicy(f"Unknown scoring criteria: {', '.join(unknown)}")
        try:
            weights: Dict[str, float] = {key: float(value) for key, value in resolved["weights"].items()}
            collateral = resolved["collateral_tiers"]
            support = resolved["support_tiers"]
            buckets = resolved["buckets"]
            policy = cls(
                criteria=criteria,
                weights=weights,
                falloff_exponent=float(resolved["falloff_exponent"]),
                contract_multiplier=int(resolved["contract_multiplier"]),
                hard_fail_enabled=bool(resolved["hard_fail"].get("enabled", True)),
                default_min_roi=float(resolved["hard_fail"].get("default_min_roi", 0.30)),
                max_penalty_points=float(resolved["penalty_pool"].get("max_points", 0.0)),
                collateral_tiers=TierTable(
                    first_cut=float(collateral["low_below"]),
                    second_cut=float(collateral["moderate_up_to"]),
                    credits=_credits(collateral["credits"]),
                ),
                support_tiers=TierTable(
                    first_cut=float(support["strong_at"]),
                    second_cut=float(support["moderate_at"]),
                    credits=_credits(support["credits"]),
                ),
                conservative_min=float(buckets["conservative"]),
                neutral_min=float(buckets["neutral"]),
                preset=resolved["preset"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidPolicy(f"Invalid scoring policy: {exc}") from exc
        missing = [key for key in criteria if key not in weights]
        if missing:
            raise InvalidPolicy(f"Missing weights for criteria: {', '.join(missing)}")
        if any(weight < 0 for weight in weights.values()):
            raise InvalidPolicy("Criterion weights must be non-negative")
        return policy

    def weight(self, key: str) -> float:
        return float(self.weights.get(key, 0.0))

    def enabled(self, key: str) -> bool:
        return key in self.criteria


def _credits(values: Any) -> Tuple[float, float, float]:
    credits = tuple(float(value) for value in values)
    if len(credits) != 3 or any(not 0.0 <= credit <= 1.0 for credit in credits):
        raise ValueError("tier credits must be three fractions between 0 and 1")
    return credits  # type: ignore[return-value]


DEFAULT_POLICY = ScoringPolicy.from_config()

__all__ = ["DEFAULT_POLICY", "KNOWN_CRITERIA", "ScoringPolicy", "TierTable"]
