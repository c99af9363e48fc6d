"""
dbdialects public package initialization.

Dialect negotiation for DB-API connections, vendor-specific SQL fragment
rendering and driver exception classification.
"""

from .classification import ErrorClassification, ExceptionVariant, VendorExceptionAdapter  # noqa: F401
from .config import DialectSettings  # noqa: F401
from .dialects import (
    BaseDialect,
    Dialect,
    DialectCapabilities,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
)  # noqa: F401
from .errors import (
    ConfigurationError,
    DialectError,
    DuplicateTemplateError,
    FeatureNotSupportedError,
    MissingTemplateParameterError,
    NoDialectSupportedError,
    ProbeFailedError,
    TypeNotSupportedError,
    UnsupportedIdentityTypeError,
)  # noqa: F401
from .probe import ProbeOutcome, ProbeResult  # noqa: F401
from .selector import DialectRegistry, default_registry, dialect_for_dsn, probe_all, select_dialect  # noqa: F401
from .types import ColumnType, ColumnTypeRegistry, ColumnTypeTemplate, TemplatePlaceholder  # noqa: F401

__all__ = [
    "BaseDialect",
    "ColumnType",
    "ColumnTypeRegistry",
    "ColumnTypeTemplate",
    "ConfigurationError",
    "Dialect",
    "DialectCapabilities",
    "DialectError",
    "DialectRegistry",
    "DialectSettings",
    "DuplicateTemplateError",
    "ErrorClassification",
    "ExceptionVariant",
    "FeatureNotSupportedError",
    "MissingTemplateParameterError",
    "MySQLDialect",
    "NoDialectSupportedError",
    "PostgresDialect",
    "ProbeFailedError",
    "ProbeOutcome",
    "ProbeResult",
    "SQLiteDialect",
    "TemplatePlaceholder",
    "TypeNotSupportedError",
    "UnsupportedIdentityTypeError",
    "VendorExceptionAdapter",
    "default_registry",
    "dialect_for_dsn",
    "probe_all",
    "select_dialect",
]
