"""
Dialect strategy interfaces describing vendor-specific SQL rendering.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Protocol

from ..classification import ErrorClassification, VendorExceptionAdapter
from ..config import resolve_slow_probe_ms
from ..errors import FeatureNotSupportedError, ProbeFailedError, UnsupportedIdentityTypeError
from ..probe import (
    ProbeOutcome,
    ProbeResult,
    execute_scalar,
    format_version,
    parse_version,
    version_at_least,
)
from ..types import ColumnType, ColumnTypeRegistry
from ..utils import get_logger, time_call


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_row_locking: bool = False
    supports_advisory_locks: bool = False
    supports_array_types: bool = False


class Dialect(Protocol):
    """
    Strategy interface consumed by statement builders and conflict handling.
    """

    @property
    def name(self) -> str: ...

    @property
    def priority(self) -> int: ...

    @property
    def minimum_version(self) -> tuple[int, ...]: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    def probe_version(self, connection: Any) -> str: ...

    def probe(self, connection: Any) -> ProbeResult: ...

    def supports_connection(self, connection: Any) -> bool: ...

    def render_column_type(
        self,
        column_type: ColumnType,
        size: int | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> str: ...

    def render_identity_column_type(self, width: int | ColumnType) -> str: ...

    @property
    def supports_row_locking(self) -> bool: ...

    @property
    def row_locking_clause(self) -> str: ...

    @property
    def supports_advisory_lock(self) -> bool: ...

    def render_try_advisory_lock(self, *keys: object) -> str: ...

    @property
    def supports_array_types(self) -> bool: ...

    def render_array_contains(self, collection: str, candidate: str) -> str: ...

    def classify_exception(self, exc: BaseException | None) -> ErrorClassification: ...


_IDENTITY_WIDTHS = {
    16: ColumnType.INT16,
    32: ColumnType.INT32,
    64: ColumnType.INT64,
}

_SCALAR_KEY_TYPES = (int, str)


def flatten_lock_keys(keys: Iterable[object]) -> list[object]:
    """
    Normalise advisory lock keys given either positionally or as one collection.

    ``(42,)`` and ``([42],)`` both yield ``[42]``; ``([1, 2],)`` yields ``[1, 2]``.
    """
    keys = list(keys)
    if len(keys) == 1 and isinstance(keys[0], (list, tuple)):
        keys = list(keys[0])
    if not keys:
        raise ValueError("An advisory lock needs at least one key.")
    for key in keys:
        if isinstance(key, bool) or not isinstance(key, _SCALAR_KEY_TYPES):
            raise TypeError(f"Advisory lock keys must be integers or SQL expressions, got {key!r}")
    return keys


class BaseDialect(ABC):
    """
    Shared dialect behaviour; vendors register templates and probe queries.

    Subclasses set the class attributes below and call ``register_column_type``
    from ``__init__``. Instances are immutable once constructed.
    """

    name: ClassVar[str] = "base"
    priority: ClassVar[int] = 100
    minimum_version: ClassVar[tuple[int, ...]] = (0,)
    capabilities: ClassVar[DialectCapabilities] = DialectCapabilities()
    dsn_schemes: ClassVar[tuple[str, ...]] = ()

    identification_query: ClassVar[str] = ""
    version_query: ClassVar[str] = ""

    identity_types: ClassVar[dict[ColumnType, str]] = {}
    exception_adapter: ClassVar[VendorExceptionAdapter] = VendorExceptionAdapter(())
    duplicate_key_codes: ClassVar[frozenset[str]] = frozenset()
    lock_not_available_codes: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, *, slow_probe_ms: int | None = None) -> None:
        self.column_types = ColumnTypeRegistry()
        self.logger = get_logger(f"dialects.{self.name}")
        self.slow_probe_ms = resolve_slow_probe_ms(override=slow_probe_ms)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} priority={self.priority}>"

    # Column types ---------------------------------------------------------
    def register_column_type(
        self, column_type: ColumnType, template: str, threshold: int | None = None
    ) -> None:
        self.column_types.register(column_type, template, threshold=threshold)

    def render_column_type(
        self,
        column_type: ColumnType,
        size: int | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> str:
        return self.column_types.resolve(column_type, size, precision, scale)

    def render_identity_column_type(self, width: int | ColumnType) -> str:
        column_type = width if isinstance(width, ColumnType) else _IDENTITY_WIDTHS.get(width)
        if column_type is None or column_type not in self.identity_types:
            raise UnsupportedIdentityTypeError(width)
        return self.identity_types[column_type]

    # Probing --------------------------------------------------------------
    def _scalar(self, connection: Any, sql: str) -> Any:
        with time_call(f"{self.name}.probe", self.logger, sql=sql, threshold_ms=self.slow_probe_ms):
            return execute_scalar(connection, sql)

    @abstractmethod
    def matches_banner(self, banner: str) -> bool:
        """
        Whether the identification query result names this vendor.
        """

    def extract_version(self, raw: str) -> str:
        return raw.split()[0]

    def probe_version(self, connection: Any) -> str:
        try:
            result = self._scalar(connection, self.version_query)
        except Exception as exc:
            raise ProbeFailedError(self.name, self.version_query, str(exc)) from exc
        text = "" if result is None else str(result).strip()
        if not text:
            raise ProbeFailedError(self.name, self.version_query, "empty result")
        version = self.extract_version(text)
        try:
            parse_version(version)
        except ValueError as exc:
            raise ProbeFailedError(self.name, self.version_query, str(exc)) from exc
        return version

    def probe(self, connection: Any) -> ProbeResult:
        """
        Check whether this dialect can serve ``connection``. Never raises.
        """
        try:
            banner = self._scalar(connection, self.identification_query)
            if not isinstance(banner, str) or not self.matches_banner(banner):
                return ProbeResult(self, ProbeOutcome.UNSUPPORTED, reason=f"banner {banner!r}")
            version = parse_version(self.probe_version(connection))
        except Exception as exc:
            return ProbeResult(self, ProbeOutcome.PROBE_ERROR, reason=str(exc), error=exc)
        if not version_at_least(version, self.minimum_version):
            return ProbeResult(
                self,
                ProbeOutcome.UNSUPPORTED,
                version=version,
                reason=f"version {format_version(version)} below minimum "
                f"{format_version(self.minimum_version)}",
            )
        return ProbeResult(self, ProbeOutcome.SUPPORTED, version=version)

    def supports_connection(self, connection: Any) -> bool:
        return self.probe(connection).supported

    # Locking and arrays ---------------------------------------------------
    @property
    def supports_row_locking(self) -> bool:
        return self.capabilities.supports_row_locking

    @property
    def row_locking_clause(self) -> str:
        raise FeatureNotSupportedError(self.name, "row locking")

    @property
    def supports_advisory_lock(self) -> bool:
        return self.capabilities.supports_advisory_locks

    def render_try_advisory_lock(self, *keys: object) -> str:
        raise FeatureNotSupportedError(self.name, "advisory locks")

    @property
    def supports_array_types(self) -> bool:
        return self.capabilities.supports_array_types

    def render_array_contains(self, collection: str, candidate: str) -> str:
        raise FeatureNotSupportedError(self.name, "array types")

    # Exception classification ---------------------------------------------
    def classify_exception(self, exc: BaseException | None) -> ErrorClassification:
        return self.exception_adapter.classify(
            exc,
            duplicate_key_codes=self.duplicate_key_codes,
            lock_not_available_codes=self.lock_not_available_codes,
        )

    def is_duplicate_key_exception(self, exc: BaseException | None) -> bool:
        return self.classify_exception(exc) is ErrorClassification.DUPLICATE_KEY

    def is_lock_not_available_exception(self, exc: BaseException | None) -> bool:
        return self.classify_exception(exc) is ErrorClassification.LOCK_NOT_AVAILABLE

