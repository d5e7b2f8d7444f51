"""Command line interface for evaluating trades and serving the API."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd
import uvicorn
from pydantic import ValidationError

from src.config import get_settings
from src.config.loader import ENVIRONMENT_VARIABLE
from src.models import serialize_results
from src.scoring.engine import TradeEvaluator
from src.scoring.errors import EvaluationError

LOGGER = logging.getLogger("trade_evaluator.cli")

EXIT_OK = 0
EXIT_BAD_INPUT = 2

DISPLAY_COLUMNS = [
    "symbol",
    "type",
    "expirationDate",
    "strike",
    "bid",
    "dte",
    "annualROI",
    "score",
    "suggestion",
    "hardFail",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score option trades against risk tolerances")
    parser.add_argument("--env", type=str, default=None, help="Configuration environment (default: APP_ENV or dev)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate a JSON payload of tolerances and trades")
    evaluate.add_argument("payload", type=str, help="Path to a JSON file with 'tolerances' and 'trades', or '-' for stdin")
    evaluate.add_argument("--policy", type=str, default=None, help="Scoring policy preset (standard or simple)")
    evaluate.add_argument("--table", action="store_true", help="Print a table instead of JSON")
    evaluate.add_argument("--top", type=int, default=20, help="Number of rows to display with --table")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="0.0.0.0", help="Interface to bind")
    serve.add_argument("--port", type=int, default=None, help="Port to bind (default: configured port)")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _read_payload(source: str) -> Dict[str, Any]:
    if source == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(source).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Payload must be a JSON object with 'tolerances' and 'trades'")
    return data


def _display(rows: List[Dict[str, Any]], limit: int) -> None:
    df = pd.DataFrame(rows)
    if df.empty:
        print("No trades evaluated.")
        return
    columns = [column for column in DISPLAY_COLUMNS if column in df.columns]
    if "error" in df.columns:
        columns.append("error")
    preview = df[columns].head(limit)
    with pd.option_context("display.max_columns", None, "display.width", 160):
        print(preview.to_string(index=False))


def _run_evaluate(args: argparse.Namespace) -> int:
    try:
        payload = _read_payload(args.payload)
    except (OSError, ValueError) as exc:
        LOGGER.error("Could not read payload: %s", exc)
        return EXIT_BAD_INPUT

    settings = get_settings(args.env)
    config = settings.scoring_dict()
    if args.policy:
        config = {**config, "preset": args.policy}

    try:
        evaluator = TradeEvaluator(config)
        results = evaluator.evaluate(payload.get("tolerances"), payload.get("trades"))
    except (EvaluationError, ValidationError) as exc:
        LOGGER.error("%s", exc)
        return EXIT_BAD_INPUT

    rows = serialize_results(results)
    if args.table:
        _display(rows, args.top)
    else:
        print(json.dumps(rows, indent=2))
    return EXIT_OK


def _run_serve(args: argparse.Namespace) -> int:
    settings = get_settings(args.env)
    os.environ[ENVIRONMENT_VARIABLE] = settings.env
    port = args.port or settings.api.port
    LOGGER.info("Serving trade evaluator on %s:%d (env: %s)", args.host, port, settings.env)
    uvicorn.run("src.api.main:app", host=args.host, port=port, log_level=settings.api.log_level.lower())
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "evaluate":
            return _run_evaluate(args)
        return _run_serve(args)
    except FileNotFoundError as exc:
        LOGGER.error("%s", exc)
        return EXIT_BAD_INPUT


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
