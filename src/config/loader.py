"""Environment aware configuration loader for the trade evaluator."""

from __future__ import annotations

import copy
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.scoring.policy import ScoringPolicy

DEFAULT_SETTINGS: Dict[str, Any] = {
    "scoring": {
        "policy": "standard",
    },
    "api": {
        "cors_origins": [],
        "cors_preview_suffix": "",
        "cors_local": "",
        "port": 10000,
        "log_level": "INFO",
    },
}

ROOT_DIR = Path(__file__).resolve().parents[2]
CONFIG_DIR = ROOT_DIR / "config"
DOTENV_PATH = ROOT_DIR / ".env"
ENVIRONMENT_VARIABLE = "APP_ENV"

load_dotenv(dotenv_path=DOTENV_PATH, override=False)


class ScoringSettings(BaseModel):
    """Scoring policy selection plus field overrides for the evaluator."""

    policy: str = "standard"
    weights: Dict[str, float] = Field(default_factory=dict)
    criteria: Optional[List[str]] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _capture_extra(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values
        values = dict(values)
        known_keys = {"policy", "weights", "criteria", "extra"}
        extras = {key: values.pop(key) for key in list(values.keys()) if key not in known_keys}
        merged_extra = dict(values.get("extra") or {})
        merged_extra.update(extras)
        values["extra"] = merged_extra
        return values

    @field_validator("weights", mode="before")
    @classmethod
    def _coerce_weights(cls, value: Mapping[str, Any]) -> Dict[str, float]:
        return {key: float(val) for key, val in dict(value or {}).items()}

    @field_validator("policy")
    @classmethod
    def _normalize_policy(cls, value: str) -> str:
        return value.strip().lower()

    def to_engine_config(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {"preset": self.policy}
        if self.weights:
            config["weights"] = dict(self.weights)
        if self.criteria is not None:
            config["criteria"] = list(self.criteria)
        config.update(self.extra)
        return config

    def to_policy(self) -> ScoringPolicy:
        return ScoringPolicy.from_config(self.to_engine_config())


class ApiSettings(BaseModel):
    cors_origins: List[str] = Field(default_factory=list)
    cors_preview_suffix: str = ""
    cors_local: str = ""
    port: int = 10000
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(item).strip() for item in value if str(item).strip()]

    @field_validator("cors_preview_suffix", "cors_local", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> str:
        return str(value or "").strip()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


class AppSettings(BaseModel):
    """Fully resolved application settings loaded from YAML and the environment."""

    model_config = ConfigDict(frozen=True)

    env: str
    scoring: ScoringSettings
    api: ApiSettings

    @field_validator("env")
    @classmethod
    def _normalize_env(cls, value: str) -> str:
        return value.lower()

    def scoring_dict(self) -> Dict[str, Any]:
        return self.scoring.to_engine_config()


# Environment variable -> (section, field)
ENVIRONMENT_OVERRIDES = {
    "CORS_ORIGIN": ("api", "cors_origins"),
    "CORS_PREVIEW_SUFFIX": ("api", "cors_preview_suffix"),
    "CORS_LOCAL": ("api", "cors_local"),
    "PORT": ("api", "port"),
    "LOG_LEVEL": ("api", "log_level"),
    "SCORING_POLICY": ("scoring", "policy"),
}


def _deep_merge(base: MutableMapping[str, Any], overrides: Mapping[str, Any]) -> MutableMapping[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, Mapping):
            existing = base.get(key)
            if isinstance(existing, MutableMapping):
                base[key] = _deep_merge(copy.deepcopy(existing), value)
            else:
                base[key] = copy.deepcopy(value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle.read()) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping at the root.")
        return data


def _environment_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for variable, (section, field) in ENVIRONMENT_OVERRIDES.items():
        value = environ.get(variable)
        if value is None or not value.strip():
            continue
        overrides.setdefault(section, {})[field] = value.strip()
    return overrides


def _build_settings(env: str) -> AppSettings:
    config_path = CONFIG_DIR / f"{env}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file for environment '{env}' not found at {config_path}")

    merged = copy.deepcopy(DEFAULT_SETTINGS)
    merged = _deep_merge(merged, _load_yaml(config_path))
    merged = _deep_merge(merged, _environment_overrides(os.environ))
    merged["env"] = env
    return AppSettings.model_validate(merged)


@lru_cache(maxsize=None)
def _cached_settings(env: str) -> AppSettings:
    return _build_settings(env)


def get_settings(env: Optional[str] = None) -> AppSettings:
    """Load settings for the requested environment (default: APP_ENV or 'dev')."""

    resolved_env = (env or os.getenv(ENVIRONMENT_VARIABLE, "dev")).strip().lower()
    return _cached_settings(resolved_env)


def reset_settings_cache() -> None:
    """Clear the cached settings, primarily used during tests."""

    _cached_settings.cache_clear()


__all__ = [
    "AppSettings",
    "ApiSettings",
    "CONFIG_DIR",
    "ENVIRONMENT_VARIABLE",
    "ScoringSettings",
    "get_settings",
    "reset_settings_cache",
]
