"""Origin allow-list matching for browser callers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from src.config.loader import ApiSettings


@dataclass(frozen=True)
class CorsPolicy:
    exact_origins: Tuple[str, ...] = ()
    preview_suffix: str = ""
    local_origin: str = ""

    @classmethod
    def from_settings(cls, settings: ApiSettings) -> "CorsPolicy":
        return cls(
            exact_origins=tuple(settings.cors_origins),
            preview_suffix=settings.cors_preview_suffix,
            local_origin=settings.cors_local,
        )

    def is_allowed(self, origin: Optional[str]) -> bool:
        # Same-origin requests and non-browser clients send no Origin header.
        if not origin:
            return True
        if origin in self.exact_origins:
            return True
        if self.local_origin and origin == self.local_origin:
            return True
        return bool(self.preview_suffix) and origin.endswith(self.preview_suffix)

    @property
    def allowed_origins(self) -> list[str]:
        origins = list(self.exact_origins)
        if self.local_origin and self.local_origin not in origins:
            origins.append(self.local_origin)
        return origins

    @property
    def allow_origin_regex(self) -> Optional[str]:
        if not self.preview_suffix:
            return None
        return ".*" + re.escape(self.preview_suffix)


__all__ = ["CorsPolicy"]
