"""
Environment-driven settings for dialect selection and probing.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError

DIALECT_ENV = "DBDIALECTS_DIALECT"
SLOW_PROBE_ENV = "DBDIALECTS_SLOW_PROBE_MS"
LOG_LEVEL_ENV = "DBDIALECTS_LOG_LEVEL"

DEFAULT_SLOW_PROBE_MS = 100
DEFAULT_LOG_LEVEL = "INFO"


def _parse_int(value: str, *, key: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc
    if parsed < 0:
        raise ConfigurationError(f"'{key}' must not be negative: {value!r}")
    return parsed


def _parse_level(value: str, *, key: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Invalid log level for '{key}': {value!r}")
    return level


def resolve_slow_probe_ms(*, default: int = DEFAULT_SLOW_PROBE_MS, override: int | None = None) -> int:
    if override is not None:
        return override
    value = os.getenv(SLOW_PROBE_ENV)
    if not value:
        return default
    return _parse_int(value, key=SLOW_PROBE_ENV)


def resolve_log_level(override: int | str | None = None) -> int:
    if isinstance(override, int):
        return override
    value = override or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    return _parse_level(value, key=LOG_LEVEL_ENV)


def resolve_forced_dialect(override: str | None = None) -> str | None:
    value = override if override is not None else os.getenv(DIALECT_ENV)
    if not value or not value.strip():
        return None
    return value.strip().lower()


@dataclass(frozen=True)
class DialectSettings:
    """
    Settings consulted by the selector. Explicit arguments win over the environment.

    ``slow_probe_ms`` applies to the built-in dialects the selector constructs;
    dialects passed in as candidates keep their own threshold.
    """

    forced_dialect: str | None = None
    slow_probe_ms: int = DEFAULT_SLOW_PROBE_MS

    @classmethod
    def from_env(cls, **overrides: Any) -> "DialectSettings":
        unknown = set(overrides) - {"forced_dialect", "slow_probe_ms"}
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(
            forced_dialect=resolve_forced_dialect(overrides.get("forced_dialect")),
            slow_probe_ms=resolve_slow_probe_ms(override=overrides.get("slow_probe_ms")),
        )
