"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final

from ..classification import ExceptionVariant, VendorExceptionAdapter, attribute_code
from ..types import ColumnType
from .base import BaseDialect, DialectCapabilities


class SQLiteDialect(BaseDialect):
    """
    SQLite dialect with no locking or array features.
    """

    name: Final[str] = "sqlite"
    priority: Final[int] = 3
    minimum_version: Final[tuple[int, ...]] = (3, 8)
    capabilities: Final[DialectCapabilities] = DialectCapabilities()
    dsn_schemes: Final[tuple[str, ...]] = ("sqlite",)

    identification_query: Final[str] = "SELECT sqlite_version();"
    version_query: Final[str] = "SELECT sqlite_version();"

    # Only INTEGER PRIMARY KEY columns alias the rowid.
    identity_types: Final[dict[ColumnType, str]] = {
        ColumnType.INT16: "integer",
        ColumnType.INT32: "integer",
        ColumnType.INT64: "integer",
    }
    exception_adapter: Final[VendorExceptionAdapter] = VendorExceptionAdapter(
        (ExceptionVariant("sqlite3", "Error", attribute_code("sqlite_errorname")),)
    )
    duplicate_key_codes: Final[frozenset[str]] = frozenset(
        {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}
    )
    lock_not_available_codes: Final[frozenset[str]] = frozenset({"SQLITE_BUSY", "SQLITE_LOCKED"})

    def __init__(self, *, slow_probe_ms: int | None = None) -> None:
        super().__init__(slow_probe_ms=slow_probe_ms)
        register = self.register_column_type
        for column_type in (
            ColumnType.ANSI_STRING_FIXED_LENGTH,
            ColumnType.ANSI_STRING,
            ColumnType.STRING_FIXED_LENGTH,
            ColumnType.STRING,
            ColumnType.GUID,
        ):
            register(column_type, "text")
        register(ColumnType.BINARY, "blob")
        register(ColumnType.BOOLEAN, "integer")
        for column_type in (ColumnType.BYTE, ColumnType.INT16, ColumnType.INT32, ColumnType.INT64):
            register(column_type, "integer")
        register(ColumnType.CURRENCY, "numeric")
        register(ColumnType.DECIMAL, "numeric")
        register(ColumnType.DOUBLE, "real")
        register(ColumnType.SINGLE, "real")
        for column_type in (
            ColumnType.DATE,
            ColumnType.DATETIME,
            ColumnType.DATETIME_OFFSET,
            ColumnType.TIME,
        ):
            register(column_type, "text")

    def matches_banner(self, banner: str) -> bool:
        return bool(banner) and banner[0].isdigit()

