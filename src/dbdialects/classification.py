"""
Driver exception recognition and semantic classification.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from .utils import get_logger

logger = get_logger("classification")


class ErrorClassification(Enum):
    DUPLICATE_KEY = "duplicate_key"
    LOCK_NOT_AVAILABLE = "lock_not_available"
    UNCLASSIFIED = "unclassified"


def attribute_code(*names: str) -> Callable[[BaseException], Any]:
    """
    Build an accessor reading the first non-empty attribute among ``names``.
    """

    def accessor(exc: BaseException) -> Any:
        for name in names:
            value = getattr(exc, name, None)
            if value not in (None, ""):
                return value
        return None

    return accessor


def first_arg_code(exc: BaseException) -> Any:
    if exc.args:
        return exc.args[0]
    return None


@dataclass(frozen=True)
class ExceptionVariant:
    """
    One recognized driver exception family.

    ``module`` is the top-level package the driver's base exception lives in
    and ``type_name`` its class name; subclasses match through their MRO.
    """

    module: str
    type_name: str
    code_accessor: Callable[[BaseException], Any]

    def matches(self, exc: BaseException) -> bool:
        for klass in type(exc).__mro__:
            root = (klass.__module__ or "").split(".", 1)[0]
            if root == self.module and klass.__name__ == self.type_name:
                return True
        return False


class VendorExceptionAdapter:
    """
    Extracts vendor error codes from exceptions raised by known drivers.
    """

    def __init__(self, variants: Iterable[ExceptionVariant]) -> None:
        self.variants = tuple(variants)

    def variant_for(self, exc: BaseException | None) -> Optional[ExceptionVariant]:
        if exc is None:
            return None
        for variant in self.variants:
            if variant.matches(exc):
                return variant
        return None

    def recognizes(self, exc: BaseException | None) -> bool:
        return self.variant_for(exc) is not None

    def extract_code(self, exc: BaseException | None) -> Optional[str]:
        variant = self.variant_for(exc)
        if variant is None:
            return None
        try:
            code = variant.code_accessor(exc)  # type: ignore[arg-type]
        except Exception as error:  # accessor failures mean "no code"
            logger.debug(
                "Could not read error code from %s: %s", type(exc).__name__, error
            )
            return None
        if code is None:
            return None
        return str(code)

    def classify(
        self,
        exc: BaseException | None,
        *,
        duplicate_key_codes: frozenset[str],
        lock_not_available_codes: frozenset[str],
    ) -> ErrorClassification:
        code = self.extract_code(exc)
        if code is None:
            return ErrorClassification.UNCLASSIFIED
        if code in duplicate_key_codes:
            return ErrorClassification.DUPLICATE_KEY
        if code in lock_not_available_codes:
            return ErrorClassification.LOCK_NOT_AVAILABLE
        return ErrorClassification.UNCLASSIFIED
