from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Tuple

from .base import CriterionResult


@dataclass(frozen=True)
class ScoreLedger:
    """Running totals folded over the scored criteria."""

    results: Tuple[CriterionResult, ...] = ()
    total_possible: float = 0.0
    points: float = 0.0
    penalty_pool: float = 0.0

    def add(self, result: CriterionResult) -> "ScoreLedger":
        return ScoreLedger(
            results=self.results + (result,),
            total_possible=self.total_possible + result.max,
            points=self.points + result.earned,
            penalty_pool=self.penalty_pool + result.severity,
        )

    @classmethod
    def fold(cls, results: Iterable[CriterionResult]) -> "ScoreLedger":
        return reduce(cls.add, results, cls())


__all__ = ["ScoreLedger"]
