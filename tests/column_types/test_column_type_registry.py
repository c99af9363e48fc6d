import pytest

from dbdialects.errors import DuplicateTemplateError, MissingTemplateParameterError, TypeNotSupportedError
from dbdialects.types import ColumnType, ColumnTypeRegistry, ColumnTypeTemplate, TemplatePlaceholder


def _string_registry():
    registry = ColumnTypeRegistry()
    registry.register(ColumnType.STRING, "varchar(255)")
    registry.register(ColumnType.STRING, "varchar($l)", threshold=8000)
    registry.register(ColumnType.STRING, "text", threshold=2147483647)
    return registry


def test_resolve_substitutes_requested_length():
    registry = _string_registry()
    assert registry.resolve(ColumnType.STRING, 50) == "varchar(50)"


def test_resolve_picks_smallest_fitting_threshold():
    registry = _string_registry()
    assert registry.resolve(ColumnType.STRING, 8000) == "varchar(8000)"
    assert registry.resolve(ColumnType.STRING, 8001) == "text"


def test_resolve_falls_back_to_default():
    registry = ColumnTypeRegistry()
    registry.register(ColumnType.ANSI_STRING, "varchar(255)")
    registry.register(ColumnType.ANSI_STRING, "varchar($l)", threshold=100)
    assert registry.resolve(ColumnType.ANSI_STRING) == "varchar(255)"
    assert registry.resolve(ColumnType.ANSI_STRING, 500) == "varchar(255)"


def test_resolve_unregistered_type_raises():
    registry = _string_registry()
    with pytest.raises(TypeNotSupportedError) as excinfo:
        registry.resolve(ColumnType.GUID, 16)
    assert excinfo.value.column_type is ColumnType.GUID
    assert excinfo.value.size == 16


def test_resolve_without_default_and_oversized_request_raises():
    registry = ColumnTypeRegistry()
    registry.register(ColumnType.BINARY, "varbinary($l)", threshold=10)
    with pytest.raises(TypeNotSupportedError):
        registry.resolve(ColumnType.BINARY, 11)


def test_register_default_twice_replaces():
    registry = ColumnTypeRegistry()
    registry.register(ColumnType.BOOLEAN, "bit")
    registry.register(ColumnType.BOOLEAN, "boolean")
    assert registry.resolve(ColumnType.BOOLEAN) == "boolean"


def test_duplicate_threshold_is_rejected_unless_replaced():
    registry = _string_registry()
    with pytest.raises(DuplicateTemplateError):
        registry.register(ColumnType.STRING, "nvarchar($l)", threshold=8000)
    registry.register(ColumnType.STRING, "nvarchar($l)", threshold=8000, replace=True)
    assert registry.resolve(ColumnType.STRING, 10) == "nvarchar(10)"


def test_precision_and_scale_substitution():
    registry = ColumnTypeRegistry()
    registry.register(ColumnType.DECIMAL, "decimal(19,5)")
    registry.register(ColumnType.DECIMAL, "decimal($p, $s)", threshold=19)
    assert registry.resolve(ColumnType.DECIMAL, precision=10, scale=2) == "decimal(10, 2)"
    assert registry.resolve(ColumnType.DECIMAL, precision=30, scale=2) == "decimal(19,5)"


def test_missing_placeholder_value_raises():
    registry = ColumnTypeRegistry()
    registry.register(ColumnType.DECIMAL, "decimal($p, $s)", threshold=19)
    with pytest.raises(MissingTemplateParameterError, match="requires scale") as excinfo:
        registry.resolve(ColumnType.DECIMAL, precision=10)
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.parameter == "scale"


def test_templates_for_orders_default_then_thresholds():
    registry = _string_registry()
    thresholds = [entry.threshold for entry in registry.templates_for(ColumnType.STRING)]
    assert thresholds == [None, 8000, 2147483647]
    assert registry.templates_for(ColumnType.TIME) == []
    assert ColumnType.STRING in registry
    assert ColumnType.TIME not in registry


def test_template_reports_its_placeholders():
    template = ColumnTypeTemplate(ColumnType.DECIMAL, "decimal($p, $s)", 19)
    assert template.placeholders == (TemplatePlaceholder.PRECISION, TemplatePlaceholder.SCALE)
    assert ColumnTypeTemplate(ColumnType.DATE, "date").render() == "date"
