from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from src.models.trade import Tolerances, Trade

from .metrics import TradeMetrics
from .policy import ScoringPolicy


@dataclass(frozen=True)
class ScoreContext:
    """Information passed to each criterion scorer."""

    trade: Trade
    metrics: TradeMetrics
    tolerances: Tolerances
    policy: ScoringPolicy

    def get_weight(self, key: str) -> float:
        return self.policy.weight(key)


@dataclass(frozen=True)
class CriterionResult:
    """Outcome of one scored criterion.

    ``observed`` and ``limit`` carry the values the criterion compared so the
    breakdown note can be rendered later without re-running the scorer.
    ``cuts`` holds tier thresholds for tiered criteria. ``severity`` is the
    criterion's share of the penalty pool.
    """

    key: str
    label: str
    max: float
    earned: float
    status: str
    observed: Optional[float] = None
    limit: Optional[float] = None
    severity: float = 0.0
    cuts: Tuple[float, ...] = ()


class CriterionScorer(Protocol):
    """Protocol each scoring criterion must implement."""

    key: str
    label: str

    def applies(self, context: ScoreContext) -> bool:
        """Whether the criterion counts toward the score for this trade."""

    def score(self, context: ScoreContext) -> CriterionResult:
        """Return the points earned out of the criterion's weight."""
