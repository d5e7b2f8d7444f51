from __future__ import annotations

import copy
from typing import Any, Dict

from .errors import InvalidPolicy

DEFAULT_POLICY_CONFIG: Dict[str, Any] = {
    "criteria": [
        "roi",
        "delta",
        "dte",
        "beta",
        "collateral",
        "support",
    ],
    "weights": {
        "roi": 35.0,
        "delta": 25.0,
        "dte": 15.0,
        "beta": 5.0,
        "collateral": 10.0,
        "support": 10.0,
    },
    "falloff_exponent": 2.0,
    "contract_multiplier": 100,
    "hard_fail": {
        "enabled": True,
        "default_min_roi": 0.30,
    },
    "penalty_pool": {
        "max_points": 15.0,
    },
    "collateral_tiers": {
        "low_below": 20000.0,
        "moderate_up_to": 50000.0,
        "credits": [1.0, 0.5, 0.2],
    },
    "support_tiers": {
        "strong_at": 10.0,
        "moderate_at": 5.0,
        "credits": [1.0, 0.5, 0.2],
    },
    "buckets": {
        "conservative": 90.0,
        "neutral": 70.0,
    },
}

# Proportional model: linear falloff, no hard fail and no penalty pool.
SIMPLE_POLICY_OVERRIDES: Dict[str, Any] = {
    "criteria": ["roi", "delta", "dte", "beta"],
    "weights": {
        "roi": 40.0,
        "delta": 30.0,
        "dte": 20.0,
        "beta": 10.0,
    },
    "falloff_exponent": 1.0,
    "hard_fail": {"enabled": False},
    "penalty_pool": {"max_points": 0.0},
    "buckets": {
        "conservative": 85.0,
        "neutral": 60.0,
    },
}

POLICY_PRESETS: Dict[str, Dict[str, Any]] = {
    "standard": {},
    "simple": SIMPLE_POLICY_OVERRIDES,
}

_NESTED_KEYS = {"weights", "hard_fail", "penalty_pool", "collateral_tiers", "support_tiers", "buckets"}


def _apply(merged: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if key in _NESTED_KEYS:
            merged[key] = {**merged.get(key, {}), **dict(value or {})}
        elif key == "criteria":
            merged[key] = list(value)
        else:
            merged[key] = value


def merge_config(overrides: Dict[str, Any] | None) -> Dict[str, Any]:
    """Resolve a policy config: defaults, then the named preset, then overrides."""

    merged = copy.deepcopy(DEFAULT_POLICY_CONFIG)
    if not overrides:
        merged["preset"] = "standard"
        return merged
    overrides = dict(overrides)
    preset = str(overrides.pop("preset", "standard") or "standard").strip().lower()
    if preset not in POLICY_PRESETS:
        raise InvalidPolicy(f"Unknown scoring policy preset: {preset}")
    _apply(merged, copy.deepcopy(POLICY_PRESETS[preset]))
    _apply(merged, overrides)
    merged["preset"] = preset
    return merged


__all__ = ["DEFAULT_POLICY_CONFIG", "POLICY_PRESETS", "SIMPLE_POLICY_OVERRIDES", "merge_config"]
