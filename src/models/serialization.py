"""Serialization helpers shared between the API and the command line."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from pydantic import BaseModel

from .trade import EvaluatedTrade, TradeError


def serialize_evaluated_trade(result: EvaluatedTrade) -> Dict[str, Any]:
    """Return a JSON-compatible, camelCase representation of a result."""

    return result.model_dump(mode="json", by_alias=True)


def serialize_trade_error(error: TradeError) -> Dict[str, Any]:
    return error.model_dump(mode="json")


def serialize_results(results: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    """Serialize an evaluation batch, keeping failed trades in their slots."""

    payload: List[Dict[str, Any]] = []
    for result in results:
        if isinstance(result, TradeError):
            payload.append(serialize_trade_error(result))
        else:
            payload.append(serialize_evaluated_trade(result))
    return payload


__all__ = [
    "serialize_evaluated_trade",
    "serialize_results",
    "serialize_trade_error",
]
