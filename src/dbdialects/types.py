"""
Vendor-neutral column types and the per-dialect template registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .errors import DuplicateTemplateError, MissingTemplateParameterError, TypeNotSupportedError


class ColumnType(Enum):
    """
    Semantic column types requested by the persistence layer.
    """

    ANSI_STRING_FIXED_LENGTH = "ansi_string_fixed_length"
    ANSI_STRING = "ansi_string"
    BINARY = "binary"
    BOOLEAN = "boolean"
    BYTE = "byte"
    CURRENCY = "currency"
    DATE = "date"
    DATETIME = "datetime"
    DATETIME_OFFSET = "datetime_offset"
    DECIMAL = "decimal"
    DOUBLE = "double"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    SINGLE = "single"
    STRING_FIXED_LENGTH = "string_fixed_length"
    STRING = "string"
    TIME = "time"
    GUID = "guid"


class TemplatePlaceholder(Enum):
    LENGTH = "$l"
    PRECISION = "$p"
    SCALE = "$s"


@dataclass(frozen=True)
class ColumnTypeTemplate:
    """
    A DDL fragment for one column type, optionally bounded by a size threshold.
    """

    column_type: ColumnType
    template: str
    threshold: Optional[int] = None

    @property
    def placeholders(self) -> tuple[TemplatePlaceholder, ...]:
        return tuple(p for p in TemplatePlaceholder if p.value in self.template)

    def render(
        self,
        length: int | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> str:
        values = {
            TemplatePlaceholder.LENGTH: length,
            TemplatePlaceholder.PRECISION: precision,
            TemplatePlaceholder.SCALE: scale,
        }
        rendered = self.template
        for placeholder in self.placeholders:
            value = values[placeholder]
            if value is None:
                raise MissingTemplateParameterError(
                    self.column_type, self.template, placeholder.name.lower()
                )
            rendered = rendered.replace(placeholder.value, str(int(value)))
        return rendered


class ColumnTypeRegistry:
    """
    Maps column types to templates, choosing by the smallest threshold that fits.

    Populated once while a dialect is constructed and only read afterwards,
    so concurrent ``resolve`` calls need no locking.
    """

    def __init__(self) -> None:
        self._defaults: Dict[ColumnType, ColumnTypeTemplate] = {}
        self._bounded: Dict[ColumnType, Dict[int, ColumnTypeTemplate]] = {}

    def register(
        self,
        column_type: ColumnType,
        template: str,
        *,
        threshold: int | None = None,
        replace: bool = False,
    ) -> ColumnTypeTemplate:
        entry = ColumnTypeTemplate(column_type, template, threshold)
        if threshold is None:
            self._defaults[column_type] = entry
            return entry
        bounded = self._bounded.setdefault(column_type, {})
        if threshold in bounded and not replace:
            raise DuplicateTemplateError(column_type, threshold)
        bounded[threshold] = entry
        return entry

    def templates_for(self, column_type: ColumnType) -> List[ColumnTypeTemplate]:
        templates: List[ColumnTypeTemplate] = []
        if column_type in self._defaults:
            templates.append(self._defaults[column_type])
        bounded = self._bounded.get(column_type, {})
        templates.extend(bounded[key] for key in sorted(bounded))
        return templates

    def lookup(self, column_type: ColumnType, size: int | None = None) -> ColumnTypeTemplate:
        if size is not None:
            bounded = self._bounded.get(column_type, {})
            fitting = [threshold for threshold in bounded if threshold >= size]
            if fitting:
                return bounded[min(fitting)]
        default = self._defaults.get(column_type)
        if default is None:
            raise TypeNotSupportedError(column_type, size)
        return default

    def resolve(
        self,
        column_type: ColumnType,
        size: int | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> str:
        requested = size if size is not None else precision
        entry = self.lookup(column_type, requested)
        return entry.render(length=requested, precision=precision, scale=scale)

    def __contains__(self, column_type: object) -> bool:
        return column_type in self._defaults or bool(self._bounded.get(column_type))  # type: ignore[arg-type]
