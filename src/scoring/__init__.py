"""Convenient exports for trade evaluation components."""

from .ceilings import BetaScorer, DeltaScorer, DTEScorer
from .collateral import CollateralScorer
from .engine import TradeEvaluation, TradeEvaluator, evaluate
from .errors import ComputationFault, EmptyInput, EvaluationError, InvalidPolicy
from .policy import DEFAULT_POLICY, ScoringPolicy
from .roi import AnnualROIScorer
from .support import SupportVarianceScorer

__all__ = [
    "AnnualROIScorer",
    "BetaScorer",
    "CollateralScorer",
    "ComputationFault",
    "DEFAULT_POLICY",
    "DTEScorer",
    "DeltaScorer",
    "EmptyInput",
    "EvaluationError",
    "InvalidPolicy",
    "ScoringPolicy",
    "SupportVarianceScorer",
    "TradeEvaluation",
    "TradeEvaluator",
    "evaluate",
]
