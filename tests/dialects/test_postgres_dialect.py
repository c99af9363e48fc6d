import pytest

from dbdialects.dialects import PostgresDialect
from dbdialects.errors import UnsupportedIdentityTypeError
from dbdialects.probe import ProbeOutcome
from dbdialects.types import ColumnType


@pytest.mark.parametrize(
    "column_type,kwargs,expected",
    [
        (ColumnType.STRING, {}, "varchar(255)"),
        (ColumnType.STRING, {"size": 50}, "varchar(50)"),
        (ColumnType.STRING, {"size": 5000}, "text"),
        (ColumnType.ANSI_STRING, {"size": 5000}, "varchar(5000)"),
        (ColumnType.ANSI_STRING_FIXED_LENGTH, {"size": 10}, "char(10)"),
        (ColumnType.DECIMAL, {"precision": 12, "scale": 3}, "decimal(12, 3)"),
        (ColumnType.DECIMAL, {}, "decimal(19,5)"),
        (ColumnType.DATETIME_OFFSET, {}, "timestamp with time zone"),
        (ColumnType.BINARY, {"size": 100}, "bytea"),
        (ColumnType.GUID, {}, "uuid"),
        (ColumnType.INT64, {}, "int8"),
    ],
)
def test_postgres_column_types(column_type, kwargs, expected):
    assert PostgresDialect().render_column_type(column_type, **kwargs) == expected


def test_postgres_identity_types():
    dialect = PostgresDialect()
    assert dialect.render_identity_column_type(16) == "smallserial"
    assert dialect.render_identity_column_type(32) == "serial"
    assert dialect.render_identity_column_type(ColumnType.INT64) == "bigserial"
    with pytest.raises(UnsupportedIdentityTypeError):
        dialect.render_identity_column_type(8)
    with pytest.raises(UnsupportedIdentityTypeError):
        dialect.render_identity_column_type(ColumnType.STRING)


def test_postgres_locking_and_arrays():
    dialect = PostgresDialect()
    assert dialect.supports_row_locking is True
    assert dialect.row_locking_clause == "FOR UPDATE"
    assert dialect.supports_advisory_lock is True
    assert dialect.render_try_advisory_lock(42) == "pg_try_advisory_lock(42)"
    assert dialect.render_try_advisory_lock(1, 2) == "pg_try_advisory_lock(1,2)"
    assert dialect.supports_array_types is True
    assert dialect.render_array_contains("tags", "ARRAY['a']") == "(tags @> ARRAY['a'])"


def test_postgres_probe_supports_connection(postgres_connection):
    dialect = PostgresDialect()
    assert dialect.probe_version(postgres_connection) == "16.2"
    result = dialect.probe(postgres_connection)
    assert result.outcome is ProbeOutcome.SUPPORTED
    assert result.version == (16, 2)
    assert dialect.supports_connection(postgres_connection) is True


def test_postgres_probe_rejects_other_banner(make_connection):
    connection = make_connection({"SELECT VERSION();": "8.0.36"})
    result = PostgresDialect().probe(connection)
    assert result.outcome is ProbeOutcome.UNSUPPORTED
    assert connection.statements == ["SELECT VERSION();"]


def test_postgres_probe_rejects_old_server(make_connection):
    connection = make_connection(
        {"SELECT VERSION();": "PostgreSQL 7.4.30 on i686", "SHOW server_version;": "7.4.30"}
    )
    result = PostgresDialect().probe(connection)
    assert result.outcome is ProbeOutcome.UNSUPPORTED
    assert result.version == (7, 4, 30)


def test_postgres_version_query_failure_is_not_support(make_connection):
    connection = make_connection(
        {
            "SELECT VERSION();": "PostgreSQL 16.2 on x86_64",
            "SHOW server_version;": RuntimeError("permission denied"),
        }
    )
    dialect = PostgresDialect()
    result = dialect.probe(connection)
    assert result.outcome is ProbeOutcome.PROBE_ERROR
    assert "permission denied" in result.reason
    assert dialect.supports_connection(connection) is False


def test_postgres_unparsable_version_is_probe_error(make_connection):
    connection = make_connection(
        {"SELECT VERSION();": "PostgreSQL 17beta1", "SHOW server_version;": "17beta1"}
    )
    assert PostgresDialect().probe(connection).outcome is ProbeOutcome.PROBE_ERROR


def test_postgres_advisory_lock_accepts_key_collection():
    dialect = PostgresDialect()
    assert dialect.render_try_advisory_lock([1, 2]) == "pg_try_advisory_lock(1,2)"
    assert dialect.render_try_advisory_lock((7,)) == "pg_try_advisory_lock(7)"
    assert dialect.render_try_advisory_lock(["hashtext('jobs')"]) == "pg_try_advisory_lock(hashtext('jobs'))"


def test_postgres_advisory_lock_rejects_bad_keys():
    dialect = PostgresDialect()
    with pytest.raises(ValueError):
        dialect.render_try_advisory_lock()
    with pytest.raises(ValueError):
        dialect.render_try_advisory_lock([])
    with pytest.raises(TypeError):
        dialect.render_try_advisory_lock(1, [2, 3])
    with pytest.raises(TypeError):
        dialect.render_try_advisory_lock({"key": 1})
