"""Configuration helpers for the API and command line."""

from __future__ import annotations

from .loader import ApiSettings, AppSettings, ScoringSettings, get_settings, reset_settings_cache

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ScoringSettings",
    "get_settings",
    "reset_settings_cache",
]
