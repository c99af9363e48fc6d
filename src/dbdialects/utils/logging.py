"""Structured logging helpers for dbdialects."""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: int | str | None = None) -> None:
    logger = logging.getLogger("dbdialects")
    if logger.handlers:
        return
    invalid_level = None
    if level is None:
        from ..config import resolve_log_level
        from ..errors import ConfigurationError

        try:
            level = resolve_log_level()
        except ConfigurationError as exc:
            invalid_level = exc
            level = logging.INFO
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)
    if invalid_level is not None:
        logger.warning("%s; falling back to INFO", invalid_level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"dbdialects.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


def time_call(name: str, logger: logging.Logger, *, sql: str | None = None, threshold_ms: int = 100):
    start = time.monotonic()

    class Timer:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            elapsed_ms = (time.monotonic() - start) * 1000
            level = logging.WARNING if elapsed_ms >= threshold_ms else logging.DEBUG
            extra = {"sql": sql, "elapsed_ms": elapsed_ms}
            logger.log(level, "%s took %.2fms", name, elapsed_ms, extra=extra)

    return Timer()
