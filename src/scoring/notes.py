"""Human readable notes for breakdown lines, rendered from finished results."""

from __future__ import annotations

from typing import Callable, Dict

from .base import CriterionResult


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def _num(value: float) -> str:
    return f"{value:.15g}"


def _roi_note(result: CriterionResult) -> str:
    if result.status == "met":
        return "Meets or exceeds minimum ROI"
    return f"Below min ROI ({_pct(result.observed)} vs {_pct(result.limit)})"


def _hard_fail_note(result: CriterionResult) -> str:
    return f"Hard fail: ROI {_pct(result.observed)} < {_pct(result.limit)}"


def _delta_note(result: CriterionResult) -> str:
    if result.status == "within":
        return "Within max delta"
    return f"Exceeds max delta ({_pct(result.observed)} > {_pct(result.limit)})"


def _dte_note(result: CriterionResult) -> str:
    if result.status == "within":
        return "Within max DTE"
    return f"Exceeds max DTE ({_num(result.observed)}d > {_num(result.limit)}d)"


def _beta_note(result: CriterionResult) -> str:
    if result.status == "within":
        return "Within max beta"
    return f"Exceeds max beta ({result.observed:.2f} > {result.limit:.2f})"


def _collateral_note(result: CriterionResult) -> str:
    return {
        "low": "Low collateral",
        "moderate": "Moderate collateral",
    }.get(result.status, "High collateral")


def _support_note(result: CriterionResult) -> str:
    strong, moderate = result.cuts
    if result.status == "strong":
        return f"Strong support buffer (≥{_num(strong)}%)"
    if result.status == "moderate":
        return f"Moderate support buffer ({_num(moderate)}–{_num(strong)}%)"
    return f"Support variance < {_num(moderate)}%"


NOTE_RENDERERS: Dict[str, Callable[[CriterionResult], str]] = {
    "roi": _roi_note,
    "roi-hard-fail": _hard_fail_note,
    "delta": _delta_note,
    "dte": _dte_note,
    "beta": _beta_note,
    "collateral": _collateral_note,
    "support": _support_note,
}


def render_note(result: CriterionResult) -> str:
    renderer = NOTE_RENDERERS.get(result.key)
    if renderer is None:
        return ""
    return renderer(result)


__all__ = ["NOTE_RENDERERS", "render_note"]
