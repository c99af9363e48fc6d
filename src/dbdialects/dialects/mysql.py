"""
MySQL dialect implementation, assuming 5.7 as the bare minimum.
"""

from __future__ import annotations

from typing import Final

from ..classification import ExceptionVariant, VendorExceptionAdapter, attribute_code, first_arg_code
from ..types import ColumnType
from .base import BaseDialect, DialectCapabilities


class MySQLDialect(BaseDialect):
    """
    MySQL dialect; MariaDB servers are rejected during probing.
    """

    name: Final[str] = "mysql"
    priority: Final[int] = 2
    minimum_version: Final[tuple[int, ...]] = (5, 7)
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_row_locking=True,
    )
    dsn_schemes: Final[tuple[str, ...]] = ("mysql",)

    identification_query: Final[str] = "SELECT @@version_comment;"
    version_query: Final[str] = "SELECT VERSION();"

    identity_types: Final[dict[ColumnType, str]] = {
        ColumnType.INT16: "smallint auto_increment",
        ColumnType.INT32: "int auto_increment",
        ColumnType.INT64: "bigint auto_increment",
    }
    # PyMySQL and mysqlclient carry the server errno as the first argument.
    exception_adapter: Final[VendorExceptionAdapter] = VendorExceptionAdapter(
        (
            ExceptionVariant("pymysql", "MySQLError", first_arg_code),
            ExceptionVariant("MySQLdb", "MySQLError", first_arg_code),
            ExceptionVariant("mysql", "Error", attribute_code("errno")),
        )
    )
    duplicate_key_codes: Final[frozenset[str]] = frozenset({"1062", "1586"})
    lock_not_available_codes: Final[frozenset[str]] = frozenset({"3572"})

    def __init__(self, *, slow_probe_ms: int | None = None) -> None:
        super().__init__(slow_probe_ms=slow_probe_ms)
        register = self.register_column_type
        register(ColumnType.ANSI_STRING_FIXED_LENGTH, "char(255)")
        register(ColumnType.ANSI_STRING_FIXED_LENGTH, "char($l)", 255)
        register(ColumnType.ANSI_STRING, "varchar(255)")
        register(ColumnType.ANSI_STRING, "varchar($l)", 16383)
        register(ColumnType.ANSI_STRING, "mediumtext", 16777215)
        register(ColumnType.ANSI_STRING, "longtext", 2147483647)
        register(ColumnType.BINARY, "longblob")
        register(ColumnType.BINARY, "varbinary($l)", 8000)
        register(ColumnType.BOOLEAN, "tinyint(1)")
        register(ColumnType.BYTE, "tinyint unsigned")
        register(ColumnType.CURRENCY, "decimal(16,4)")
        register(ColumnType.DATE, "date")
        register(ColumnType.DATETIME, "datetime(6)")
        register(ColumnType.DATETIME_OFFSET, "timestamp(6)")
        register(ColumnType.DECIMAL, "decimal(19,5)")
        register(ColumnType.DECIMAL, "decimal($p, $s)", 65)
        register(ColumnType.DOUBLE, "double")
        register(ColumnType.INT16, "smallint")
        register(ColumnType.INT32, "int")
        register(ColumnType.INT64, "bigint")
        register(ColumnType.SINGLE, "float")
        register(ColumnType.STRING_FIXED_LENGTH, "char(255)")
        register(ColumnType.STRING_FIXED_LENGTH, "char($l)", 255)
        register(ColumnType.STRING, "varchar(255)")
        register(ColumnType.STRING, "varchar($l)", 16383)
        register(ColumnType.STRING, "mediumtext", 16777215)
        register(ColumnType.STRING, "longtext", 1073741823)
        register(ColumnType.TIME, "time")
        register(ColumnType.GUID, "char(36)")

    def matches_banner(self, banner: str) -> bool:
        # Distribution builds report e.g. "(Ubuntu)" or "Percona Server", so only
        # MariaDB is told apart here; the version query must still parse.
        return "mariadb" not in banner.lower()

    def extract_version(self, raw: str) -> str:
        # "8.0.36-0ubuntu0.22.04.1" -> "8.0.36"
        return raw.split()[0].split("-", 1)[0]

    @property
    def row_locking_clause(self) -> str:
        return "FOR UPDATE"

