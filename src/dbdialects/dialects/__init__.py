"""
Dialect strategy registry.
"""

from .base import BaseDialect, Dialect, DialectCapabilities
from .mysql import MySQLDialect
from .postgres import PostgresDialect
from .sqlite import SQLiteDialect

__all__ = [
    "BaseDialect",
    "Dialect",
    "DialectCapabilities",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
]
