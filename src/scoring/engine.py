from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, Union

from pydantic import ValidationError

from src.models.trade import EvaluatedTrade, Suggestion, Tolerances, Trade, TradeError

from .base import CriterionResult, ScoreContext
from .ceilings import BetaScorer, DeltaScorer, DTEScorer
from .collateral import CollateralScorer
from .errors import ComputationFault, EmptyInput
from .ledger import ScoreLedger
from .metrics import TradeMetrics, derive_metrics
from .penalties import pool_penalty
from .policy import DEFAULT_POLICY, ScoringPolicy
from .report import to_evaluated_trade
from .roi import AnnualROIScorer
from .support import SupportVarianceScorer

logger = logging.getLogger(__name__)

SCORER_REGISTRY: Dict[str, Type] = {
    AnnualROIScorer.key: AnnualROIScorer,
    DeltaScorer.key: DeltaScorer,
    DTEScorer.key: DTEScorer,
    BetaScorer.key: BetaScorer,
    CollateralScorer.key: CollateralScorer,
    SupportVarianceScorer.key: SupportVarianceScorer,
}

# Breakdown order; tolerance-gated criteria come before the always-on ones.
EVALUATION_ORDER = ("roi", "delta", "dte", "beta", "collateral", "support")

HARD_FAIL_KEY = "roi-hard-fail"

EvaluationItem = Union[EvaluatedTrade, TradeError]


@dataclass(frozen=True)
class TradeEvaluation:
    """Full-precision result for one trade."""

    trade: Trade
    metrics: TradeMetrics
    ledger: ScoreLedger
    hard_fail: bool
    penalties_applied: float
    points_final: float
    score: float
    suggestion: Suggestion

    @property
    def points_before_penalties(self) -> float:
        return self.ledger.points


class TradeEvaluator:
    """Scores trade candidates against caller tolerances under one policy."""

    def __init__(self, policy: ScoringPolicy | Mapping[str, Any] | None = None):
        if policy is None:
            self.policy = DEFAULT_POLICY
        elif isinstance(policy, ScoringPolicy):
            self.policy = policy
        else:
            self.policy = ScoringPolicy.from_config(policy)
        self._scorers = [SCORER_REGISTRY[key]() for key in EVALUATION_ORDER if self.policy.enabled(key)]

    @property
    def enabled_criteria(self) -> List[str]:
        return [scorer.key for scorer in self._scorers]

    def evaluate(
        self,
        tolerances: Tolerances | Mapping[str, Any] | None,
        trades: Optional[Sequence[Trade | Mapping[str, Any]]],
    ) -> List[EvaluationItem]:
        """Evaluate every trade in order; a failing trade keeps its slot as a ``TradeError``."""

        if not isinstance(trades, (list, tuple)) or not trades:
            raise EmptyInput()
        resolved = coerce_tolerances(tolerances)
        logger.debug("Evaluating %d trades with %s policy", len(trades), self.policy.preset)

        results: List[EvaluationItem] = []
        for index, raw in enumerate(trades):
            try:
                trade = raw if isinstance(raw, Trade) else Trade.model_validate(raw)
                results.append(to_evaluated_trade(self.evaluate_trade(trade, resolved)))
            except (ValidationError, ComputationFault) as exc:
                symbol = _symbol_of(raw)
                logger.warning("Failed to evaluate trade %d", index, extra={"symbol": symbol})
                results.append(TradeError(index=index, symbol=symbol, error=str(exc)))
        return results

    def hard_fail_threshold(self, tolerances: Tolerances) -> Optional[float]:
        if not self.policy.hard_fail_enabled:
            return None
        if tolerances.min_roi is not None:
            return tolerances.min_roi
        return self.policy.default_min_roi

    def evaluate_trade(self, trade: Trade, tolerances: Tolerances | None = None) -> TradeEvaluation:
        tolerances = tolerances or Tolerances()
        metrics = derive_metrics(trade, self.policy.contract_multiplier)

        threshold = self.hard_fail_threshold(tolerances)
        if threshold is not None and metrics.annual_roi < threshold:
            return self._hard_fail(trade, metrics, threshold)

        context = ScoreContext(trade=trade, metrics=metrics, tolerances=tolerances, policy=self.policy)
        ledger = ScoreLedger.fold(scorer.score(context) for scorer in self._scorers if scorer.applies(context))
        penalties = pool_penalty(ledger.penalty_pool, self.policy.max_penalty_points)
        points_final = max(0.0, ledger.points - penalties)
        score = normalize_score(points_final, ledger.total_possible)

        return TradeEvaluation(
            trade=trade,
            metrics=metrics,
            ledger=ledger,
            hard_fail=False,
            penalties_applied=penalties,
            points_final=points_final,
            score=score,
            suggestion=self.classify(score),
        )

    def classify(self, score: float) -> Suggestion:
        if score >= self.policy.conservative_min:
            return Suggestion.CONSERVATIVE
        if score >= self.policy.neutral_min:
            return Suggestion.NEUTRAL
        return Suggestion.AGGRESSIVE

    def _hard_fail(self, trade: Trade, metrics: TradeMetrics, threshold: float) -> TradeEvaluation:
        logger.debug("Hard fail for %s: ROI %.4f below %.4f", trade.symbol, metrics.annual_roi, threshold)
        ledger = ScoreLedger.fold(
            [
                CriterionResult(
                    key=HARD_FAIL_KEY,
                    label=AnnualROIScorer.label,
                    max=self.policy.weight(AnnualROIScorer.key),
                    earned=0.0,
                    status="hard-fail",
                    observed=metrics.annual_roi,
                    limit=threshold,
                )
            ]
        )
        return TradeEvaluation(
            trade=trade,
            metrics=metrics,
            ledger=ledger,
            hard_fail=True,
            penalties_applied=0.0,
            points_final=0.0,
            score=0.0,
            suggestion=Suggestion.AGGRESSIVE,
        )


def normalize_score(points: float, total_possible: float) -> float:
    """Scale points to 0..100; nothing applicable counts as a full pass."""

    if total_possible <= 0:
        return 100.0
    return max(0.0, min(100.0, (points / total_possible) * 100))


def coerce_tolerances(tolerances: Tolerances | Mapping[str, Any] | None) -> Tolerances:
    if tolerances is None:
        return Tolerances()
    if isinstance(tolerances, Tolerances):
        return tolerances
    return Tolerances.model_validate(tolerances)


def _symbol_of(raw: Any) -> Optional[str]:
    if isinstance(raw, Trade):
        return raw.symbol
    if isinstance(raw, Mapping):
        symbol = raw.get("symbol")
        return str(symbol) if symbol is not None else None
    return None


_default_evaluator = TradeEvaluator()


def evaluate(
    tolerances: Tolerances | Mapping[str, Any] | None,
    trades: Optional[Sequence[Trade | Mapping[str, Any]]],
    policy: ScoringPolicy | Mapping[str, Any] | None = None,
) -> List[EvaluationItem]:
    """Evaluate ``trades`` with the default policy unless one is given."""

    evaluator = _default_evaluator if policy is None else TradeEvaluator(policy)
    return evaluator.evaluate(tolerances, trades)


__all__ = [
    "EVALUATION_ORDER",
    "HARD_FAIL_KEY",
    "SCORER_REGISTRY",
    "EvaluationItem",
    "TradeEvaluation",
    "TradeEvaluator",
    "coerce_tolerances",
    "evaluate",
    "normalize_score",
]
