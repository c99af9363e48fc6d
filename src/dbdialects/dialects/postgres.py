"""
PostgreSQL dialect implementation, assuming 8.0 as the bare minimum.
"""

from __future__ import annotations

from typing import Final

from ..classification import ExceptionVariant, VendorExceptionAdapter, attribute_code
from ..types import ColumnType
from .base import BaseDialect, DialectCapabilities, flatten_lock_keys

_MAX_TEXT = 2147483647
_MAX_UNICODE_TEXT = 1073741823


class PostgresDialect(BaseDialect):
    """
    PostgreSQL dialect with row locking, advisory locks and native arrays.
    """

    name: Final[str] = "postgresql"
    priority: Final[int] = 1
    minimum_version: Final[tuple[int, ...]] = (8, 0)
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_row_locking=True,
        supports_advisory_locks=True,
        supports_array_types=True,
    )
    dsn_schemes: Final[tuple[str, ...]] = ("postgres", "postgresql")

    identification_query: Final[str] = "SELECT VERSION();"
    version_query: Final[str] = "SHOW server_version;"

    identity_types: Final[dict[ColumnType, str]] = {
        ColumnType.INT16: "smallserial",
        ColumnType.INT32: "serial",
        ColumnType.INT64: "bigserial",
    }
    # psycopg 3 and asyncpg expose ``sqlstate``; psycopg2 exposes ``pgcode``.
    exception_adapter: Final[VendorExceptionAdapter] = VendorExceptionAdapter(
        (
            ExceptionVariant("psycopg", "Error", attribute_code("sqlstate")),
            ExceptionVariant("psycopg2", "Error", attribute_code("pgcode")),
            ExceptionVariant("asyncpg", "PostgresError", attribute_code("sqlstate")),
        )
    )
    duplicate_key_codes: Final[frozenset[str]] = frozenset({"23505"})
    lock_not_available_codes: Final[frozenset[str]] = frozenset({"55P03"})

    def __init__(self, *, slow_probe_ms: int | None = None) -> None:
        super().__init__(slow_probe_ms=slow_probe_ms)
        register = self.register_column_type
        register(ColumnType.ANSI_STRING_FIXED_LENGTH, "char(255)")
        register(ColumnType.ANSI_STRING_FIXED_LENGTH, "char($l)", 8000)
        register(ColumnType.ANSI_STRING, "varchar(255)")
        register(ColumnType.ANSI_STRING, "varchar($l)", 8000)
        register(ColumnType.ANSI_STRING, "text", _MAX_TEXT)
        register(ColumnType.BINARY, "bytea")
        register(ColumnType.BINARY, "bytea", _MAX_TEXT)
        register(ColumnType.BOOLEAN, "boolean")
        register(ColumnType.BYTE, "int2")
        register(ColumnType.CURRENCY, "decimal(16,4)")
        register(ColumnType.DATE, "date")
        register(ColumnType.DATETIME, "timestamp")
        register(ColumnType.DATETIME_OFFSET, "timestamp with time zone")
        register(ColumnType.DECIMAL, "decimal(19,5)")
        register(ColumnType.DECIMAL, "decimal($p, $s)", 19)
        register(ColumnType.DOUBLE, "float8")
        register(ColumnType.INT16, "int2")
        register(ColumnType.INT32, "int4")
        register(ColumnType.INT64, "int8")
        register(ColumnType.SINGLE, "float4")
        register(ColumnType.STRING_FIXED_LENGTH, "char(255)")
        register(ColumnType.STRING_FIXED_LENGTH, "char($l)", 4000)
        register(ColumnType.STRING, "varchar(255)")
        register(ColumnType.STRING, "varchar($l)", 4000)
        register(ColumnType.STRING, "text", _MAX_UNICODE_TEXT)
        register(ColumnType.TIME, "time")
        register(ColumnType.GUID, "uuid")

    def matches_banner(self, banner: str) -> bool:
        return banner.startswith("PostgreSQL ")

    @property
    def row_locking_clause(self) -> str:
        return "FOR UPDATE"

    def render_try_advisory_lock(self, *keys: object) -> str:
        params = ",".join(str(key) for key in flatten_lock_keys(keys))
        return f"pg_try_advisory_lock({params})"

    def render_array_contains(self, collection: str, candidate: str) -> str:
        return f"({collection} @> {candidate})"

