"""Exceptions raised while evaluating trades."""

from __future__ import annotations


class EvaluationError(Exception):
    """Base class for evaluation failures surfaced to callers."""


class EmptyInput(EvaluationError):
    """Raised when an evaluation request carries no trades."""

    def __init__(self, message: str = "No trades provided") -> None:
        super().__init__(message)


class InvalidPolicy(EvaluationError):
    """Raised when a scoring policy configuration cannot be resolved."""


class ComputationFault(EvaluationError):
    """Raised when a derived metric is not a finite number."""

    def __init__(self, metric: str, value: float) -> None:
        super().__init__(f"Non-finite value for {metric}: {value!r}")
        self.metric = metric
        self.value = value


__all__ = ["ComputationFault", "EmptyInput", "EvaluationError", "InvalidPolicy"]
