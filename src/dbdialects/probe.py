"""
Helpers for running probe queries against DB-API connections.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .dialects.base import Dialect

_VERSION_RE = re.compile(r"\d+(?:\.\d+){0,3}")


def execute_scalar(connection: Any, sql: str) -> Any:
    """
    Run ``sql`` and return the first column of the first row, or ``None``.
    """
    cursor = connection.cursor()
    try:
        cursor.execute(sql)
        row = cursor.fetchone()
    finally:
        close = getattr(cursor, "close", None)
        if close is not None:
            close()
    if not row:
        return None
    if isinstance(row, dict):
        return next(iter(row.values()), None)
    return row[0]


def parse_version(value: str) -> tuple[int, ...]:
    """
    Parse a dotted version such as ``"16.2"`` into ``(16, 2)``.

    Raises ``ValueError`` for anything but one to four numeric components.
    """
    text = (value or "").strip()
    if not _VERSION_RE.fullmatch(text):
        raise ValueError(f"Unparsable version string: {value!r}")
    return tuple(int(part) for part in text.split("."))


def format_version(version: tuple[int, ...]) -> str:
    return ".".join(str(part) for part in version)


def version_at_least(version: tuple[int, ...], minimum: tuple[int, ...]) -> bool:
    width = max(len(version), len(minimum))
    padded = version + (0,) * (width - len(version))
    required = minimum + (0,) * (width - len(minimum))
    return padded >= required


class ProbeOutcome(Enum):
    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"
    PROBE_ERROR = "probe_error"


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of asking one dialect whether it can serve a connection.
    """

    dialect: "Dialect"
    outcome: ProbeOutcome
    version: Optional[tuple[int, ...]] = None
    reason: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def supported(self) -> bool:
        return self.outcome is ProbeOutcome.SUPPORTED
