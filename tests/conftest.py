"""Pytest configuration and fixtures for postgis-search tests."""

import pytest
from fastapi.testclient import TestClient


class FakeCursor:
    """Cursor that records statements and replays scripted results."""

    def __init__(self, connection):
        self.connection = connection
        self._rows = []

    def execute(self, query, params=None):
        self.connection.executed.append((query, params))
        result = self.connection.results.pop(0) if self.connection.results else []
        if isinstance(result, Exception):
            raise result
        self._rows = list(result)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    """Stand-in for a psycopg connection with dict rows."""

    def __init__(self):
        self.executed = []
        self.results = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def returns(self, *results):
        """Queue one result (list of row dicts, or an exception) per statement."""
        self.results.extend(results)

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True

    @property
    def last_statement(self):
        return self.executed[-1]


@pytest.fixture(scope="function")
def store(monkeypatch):
    """Install a fake connection as the application's database connection."""
    import postgis_search.database

    connection = FakeConnection()
    monkeypatch.setattr(postgis_search.database, "_connection", connection)
    yield connection


@pytest.fixture(scope="function")
def client(store, monkeypatch):
    """Create a test client wired to the fake connection."""
    import postgis_search.main

    # Keep the fake connection in place across the app lifespan
    monkeypatch.setattr(postgis_search.main, "init_database", lambda url: None)
    monkeypatch.setattr(postgis_search.main, "close_database", lambda: None)

    with TestClient(postgis_search.main.app) as test_client:
        yield test_client
