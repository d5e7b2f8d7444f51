from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .trade import Tolerances


class EvaluateRequest(BaseModel):
    """Body of an evaluation request.

    ``trades`` is left untyped so each entry can be validated on its own and
    a missing or non-list value reaches the evaluator as an empty input.
    The scoring policy comes from settings; unknown body keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    tolerances: Optional[Tolerances] = None
    trades: Any = None


__all__ = ["EvaluateRequest"]
