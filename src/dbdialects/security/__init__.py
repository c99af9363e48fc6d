"""Security helpers for dbdialects."""

from .dsns import DSNConfig, parse_dsn
from .redaction import is_sensitive_key, redact_query_params

__all__ = ["DSNConfig", "parse_dsn", "is_sensitive_key", "redact_query_params"]
