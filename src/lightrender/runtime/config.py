"""Render configuration.

`RenderConfig` is immutable; build a new one with `dataclasses.replace()`
to change a setting. `from_env()` reads the process environment:

    LIGHTRENDER_MODE         production|prod → "prod", anything else → "dev"
    LIGHTRENDER_POOL_SIZE    object-pool capacity per kind
    LIGHTRENDER_CACHE_LIMIT  response-cache capacity
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

Mode = Literal["dev", "prod"]

_PRODUCTION_VALUES = frozenset({"production", "prod"})


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Settings shared by the pool, cache, renderer and validators.

    Attributes:
        mode: "prod" minifies output and silences validation warnings
        pool_size: Free-list capacity for each pooled kind
        cache_limit: Maximum number of cached responses
        max_computed_source: Character limit for computed/binding sources
        max_event_source: Character limit for event handler sources
        max_css_value: Truncation length for sanitized css values
        lang: Value of the ``<html lang>`` attribute
    """

    mode: Mode = "dev"
    pool_size: int = 150
    cache_limit: int = 2000
    max_computed_source: int = 4096
    max_event_source: int = 8192
    max_css_value: int = 256
    lang: str = "en"

    def __post_init__(self) -> None:
        if self.mode not in ("dev", "prod"):
            raise ValueError(f"mode must be 'dev' or 'prod', got {self.mode!r}")
        if self.cache_limit < 1:
            raise ValueError("cache_limit must be at least 1")
        if self.pool_size < 0:
            raise ValueError("pool_size must not be negative")

    @property
    def is_production(self) -> bool:
        return self.mode == "prod"

    def source_limit(self, kind: str) -> int:
        """Maximum source length for a client function kind."""
        if kind == "event":
            return self.max_event_source
        return self.max_computed_source

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RenderConfig:
        """Build a config from environment variables.

        Raises:
            ValueError: If a numeric variable is not an integer
        """
        env = os.environ if environ is None else environ
        mode: Mode = (
            "prod" if env.get("LIGHTRENDER_MODE", "").lower() in _PRODUCTION_VALUES else "dev"
        )
        kwargs: dict[str, int] = {}
        for var, field_name in (
            ("LIGHTRENDER_POOL_SIZE", "pool_size"),
            ("LIGHTRENDER_CACHE_LIMIT", "cache_limit"),
        ):
            raw = env.get(var)
            if raw:
                try:
                    kwargs[field_name] = int(raw)
                except ValueError:
                    raise ValueError(f"{var} must be an integer, got {raw!r}") from None
        return cls(mode=mode, **kwargs)
