"""
Error taxonomy raised by dialect rendering and selection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from .probe import ProbeResult
    from .types import ColumnType


class DialectError(RuntimeError):
    """Base error for dialect-related failures."""


class ConfigurationError(DialectError):
    """Raised when environment or explicit settings are invalid."""


class ProbeFailedError(DialectError):
    """Raised when a probe query cannot run or returns unparsable output."""

    def __init__(self, dialect: str, query: str, detail: str) -> None:
        self.dialect = dialect
        self.query = query
        super().__init__(f"{dialect} probe failed for {query!r}: {detail}")


class NoDialectSupportedError(DialectError):
    """Raised when no candidate dialect accepts a connection."""

    def __init__(self, results: Sequence["ProbeResult"] = (), *, detail: str | None = None) -> None:
        self.results = list(results)
        if detail is None:
            tried = ", ".join(f"{r.dialect.name}={r.outcome.value}" for r in self.results)
            detail = f"tried: {tried}" if tried else "no candidate dialects registered"
        super().__init__(f"No dialect supports this connection ({detail}).")


class TypeNotSupportedError(DialectError):
    """Raised when a column type has no usable template."""

    def __init__(self, column_type: "ColumnType", size: int | None = None, *, detail: str | None = None) -> None:
        self.column_type = column_type
        self.size = size
        message = f"Cannot render column type {column_type.name}"
        if size is not None:
            message += f" (requested size {size})"
        message += f": {detail or 'no template registered'}"
        super().__init__(message)


class MissingTemplateParameterError(DialectError, ValueError):
    """Raised when a template placeholder has no value to substitute."""

    def __init__(self, column_type: "ColumnType", template: str, parameter: str) -> None:
        self.column_type = column_type
        self.template = template
        self.parameter = parameter
        super().__init__(f"Template {template!r} for {column_type.name} requires {parameter}.")


class DuplicateTemplateError(DialectError, ValueError):
    """Raised when a threshold is registered twice for the same column type."""

    def __init__(self, column_type: "ColumnType", threshold: int) -> None:
        self.column_type = column_type
        self.threshold = threshold
        super().__init__(
            f"Template for {column_type.name} at threshold {threshold} already registered "
            "(pass replace=True to overwrite)."
        )


class UnsupportedIdentityTypeError(DialectError, ValueError):
    """Raised when an identity column is requested for a non-integer width."""

    def __init__(self, width: Any) -> None:
        self.width = width
        super().__init__(f"Invalid identity column type: {width}")


class FeatureNotSupportedError(DialectError):
    """Raised when rendering a feature the dialect does not provide."""

    def __init__(self, dialect: str, feature: str) -> None:
        self.dialect = dialect
        self.feature = feature
        super().__init__(f"Dialect '{dialect}' does not support {feature}.")
