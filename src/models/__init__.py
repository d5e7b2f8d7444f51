from .request import EvaluateRequest
from .serialization import (
    serialize_evaluated_trade,
    serialize_results,
    serialize_trade_error,
)
from .trade import (
    EvaluatedTrade,
    ScoreComponent,
    Suggestion,
    Tolerances,
    Trade,
    TradeError,
)

__all__ = [
    "EvaluateRequest",
    "EvaluatedTrade",
    "ScoreComponent",
    "Suggestion",
    "Tolerances",
    "Trade",
    "TradeError",
    "serialize_evaluated_trade",
    "serialize_results",
    "serialize_trade_error",
]
