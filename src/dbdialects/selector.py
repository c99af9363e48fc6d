"""
Dialect selection by probing a live connection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterable, Iterator, List, Optional

from .config import DialectSettings
from .dialects import MySQLDialect, PostgresDialect, SQLiteDialect
from .dialects.base import Dialect
from .errors import NoDialectSupportedError
from .probe import ProbeOutcome, ProbeResult
from .security.dsns import parse_dsn
from .utils import get_logger

logger = get_logger("selector")


class DialectRegistry:
    """
    Ordered collection of available dialects, iterated by ascending priority.
    """

    def __init__(self, dialects: Iterable[Dialect] = ()) -> None:
        self._dialects: list[Dialect] = []
        for dialect in dialects:
            self.register(dialect)

    def register(self, dialect: Dialect) -> Dialect:
        if self.get(dialect.name) is not None:
            raise ValueError(f"Dialect '{dialect.name}' is already registered.")
        self._dialects.append(dialect)
        # sorted() is stable, so equal priorities keep registration order
        self._dialects = sorted(self._dialects, key=lambda item: item.priority)
        return dialect

    def get(self, name: str) -> Optional[Dialect]:
        normalized = name.lower()
        for dialect in self._dialects:
            if dialect.name == normalized:
                return dialect
        return None

    def names(self) -> list[str]:
        return [dialect.name for dialect in self._dialects]

    def __iter__(self) -> Iterator[Dialect]:
        return iter(list(self._dialects))

    def __len__(self) -> int:
        return len(self._dialects)


@lru_cache(maxsize=4)
def default_registry(slow_probe_ms: int | None = None) -> DialectRegistry:
    """
    Built-in dialects, constructed once per threshold and shared read-only.
    """
    return DialectRegistry(
        [
            PostgresDialect(slow_probe_ms=slow_probe_ms),
            MySQLDialect(slow_probe_ms=slow_probe_ms),
            SQLiteDialect(slow_probe_ms=slow_probe_ms),
        ]
    )


def _ordered(
    candidates: Iterable[Dialect] | None, settings: DialectSettings | None = None
) -> List[Dialect]:
    if candidates is None:
        candidates = default_registry(settings.slow_probe_ms if settings else None)
    return sorted(candidates, key=lambda dialect: dialect.priority)


def _log_result(result: ProbeResult) -> None:
    if result.outcome is ProbeOutcome.PROBE_ERROR:
        # Connectivity problems surface here as well as wrong-vendor connections.
        logger.warning(
            "Probe for dialect %s raised %s: %s",
            result.dialect.name,
            type(result.error).__name__,
            result.reason,
        )
    elif result.outcome is ProbeOutcome.UNSUPPORTED:
        logger.debug("Dialect %s does not support connection: %s", result.dialect.name, result.reason)
    else:
        logger.debug("Dialect %s supports connection", result.dialect.name)


def probe_all(
    connection: Any,
    candidates: Iterable[Dialect] | None = None,
    *,
    settings: DialectSettings | None = None,
) -> List[ProbeResult]:
    """
    Probe every candidate in priority order without stopping at the first match.
    """
    results: List[ProbeResult] = []
    for dialect in _ordered(candidates, settings):
        result = dialect.probe(connection)
        _log_result(result)
        results.append(result)
    return results


def select_dialect(
    connection: Any,
    candidates: Iterable[Dialect] | None = None,
    *,
    settings: DialectSettings | None = None,
) -> Dialect:
    """
    Return the highest-precedence dialect that accepts ``connection``.

    Candidates are probed in ascending ``priority``; the first supported one
    wins, so ordering alone breaks ties. A dialect named by
    ``settings.forced_dialect`` is returned without probing; settings default to
    ``DialectSettings.from_env()``.
    Raises ``NoDialectSupportedError`` when nothing matches.
    """
    if settings is None:
        settings = DialectSettings.from_env()
    ordered = _ordered(candidates, settings)

    forced_name = settings.forced_dialect
    if forced_name is not None:
        for dialect in ordered:
            if dialect.name == forced_name:
                logger.info("Using forced dialect %s without probing", dialect.name)
                return dialect
        raise NoDialectSupportedError(
            detail=f"forced dialect '{forced_name}' is not among {[d.name for d in ordered]}"
        )

    results: List[ProbeResult] = []
    for dialect in ordered:
        result = dialect.probe(connection)
        _log_result(result)
        results.append(result)
        if result.supported:
            logger.info("Selected dialect %s (priority %s)", dialect.name, dialect.priority)
            return dialect
    raise NoDialectSupportedError(results)


def dialect_for_dsn(dsn: str, candidates: Iterable[Dialect] | None = None) -> Dialect:
    """
    Pick a dialect from the DSN scheme alone, without opening a connection.
    """
    parsed = parse_dsn(dsn)
    backend = parsed.backend
    for dialect in _ordered(candidates):
        if backend in getattr(dialect, "dsn_schemes", ()):
            logger.debug("DSN %s maps to dialect %s", parsed.redacted(), dialect.name)
            return dialect
    raise NoDialectSupportedError(detail=f"no dialect handles DSN scheme '{parsed.driver}' ({parsed.redacted()})")
