"""Falloff and severity curves applied when a tolerance is exceeded."""

from __future__ import annotations


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def heavy_penalty(value: float, tolerance: float, exponent: float = 2.0) -> float:
    """Fraction of credit kept for ``value`` against a ceiling ``tolerance``.

    Within the ceiling the full credit is kept. Past it the credit decays as
    ``(tolerance / value) ** exponent``: with the default square falloff,
    doubling the limit keeps a quarter of the points.
    """

    if value <= tolerance:
        return 1.0
    ratio = tolerance / value if tolerance > 0 else 0.0
    return clamp01(ratio ** exponent)


def exceedance_severity(over_ratio: float) -> float:
    """Map ``value / tolerance`` onto 0..1; 0 at the boundary, 0.5 at 2x."""

    if over_ratio <= 1:
        return 0.0
    return max(0.0, 1 - (1 / over_ratio))


def pool_penalty(penalty_pool: float, max_points: float) -> float:
    """Points deducted for the summed severities, capped at ``max_points``."""

    if max_points <= 0:
        return 0.0
    return min(max_points, max_points * clamp01(penalty_pool))


__all__ = ["clamp01", "exceedance_severity", "heavy_penalty", "pool_penalty"]
