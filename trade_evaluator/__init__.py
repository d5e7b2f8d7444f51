"""Top-level CLI package for the trade evaluator."""

from __future__ import annotations

from typing import Sequence

from .cli import main as cli_main

__all__ = ["main"]


def main(argv: Sequence[str] | None = None) -> int:
    """Dispatch to the trade evaluator CLI."""

    return cli_main(argv)
