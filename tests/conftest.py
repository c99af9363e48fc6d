import pytest

from dbdialects.config import DIALECT_ENV, LOG_LEVEL_ENV, SLOW_PROBE_ENV


@pytest.fixture(autouse=True)
def _clean_dialect_env(monkeypatch):
    for name in (DIALECT_ENV, SLOW_PROBE_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection
        self._row = None
        self.closed = False

    def execute(self, sql, params=None):
        self.connection.statements.append(sql)
        response = self.connection.responses.get(sql)
        if isinstance(response, BaseException):
            raise response
        if sql not in self.connection.responses:
            raise RuntimeError(f"unexpected query: {sql}")
        self._row = None if response is None else (response,)

    def fetchone(self):
        return self._row

    def close(self):
        self.closed = True


class FakeConnection:
    """DB-API connection answering probe queries from a canned mapping."""

    def __init__(self, responses):
        self.responses = dict(responses)
        self.statements = []

    def cursor(self):
        return FakeCursor(self)


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def postgres_connection():
    return FakeConnection(
        {
            "SELECT VERSION();": "PostgreSQL 16.2 (Debian 16.2-1.pgdg120+2) on x86_64-pc-linux-gnu",
            "SHOW server_version;": "16.2 (Debian 16.2-1.pgdg120+2)",
        }
    )
