from __future__ import annotations

import pytest

from core import db


class FakeStatement:
    def __init__(self, conn: "FakeConnection", sql: str) -> None:
        self.conn = conn
        self.sql = sql

    async def fetch(self, *args):
        self.conn.calls.append((self.sql, list(args)))
        if self.conn.error is not None:
            raise self.conn.error
        rows = self.conn.results.pop(0) if self.conn.results else self.conn.rows
        if "LIMIT $" in self.sql:
            # Behave like the store would for the trailing LIMIT/OFFSET values.
            limit, offset = args[-2], args[-1]
            rows = rows[offset:offset + limit]
        return rows

    def get_statusmsg(self) -> str:
        return self.conn.status


class FakeConnection:
    """
    Stands in for an asyncpg connection; records every statement and its values.
    """

    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.results: list[list[dict]] = []
        self.status = "SELECT 0"
        self.error: Exception | None = None
        self.calls: list[tuple[str, list]] = []
        self.opened = 0
        self.closed = 0

    async def prepare(self, sql: str) -> FakeStatement:
        return FakeStatement(self, sql)

    async def close(self) -> None:
        self.closed += 1


@pytest.fixture()
def fake_conn(monkeypatch) -> FakeConnection:
    conn = FakeConnection()

    async def _open():
        conn.opened += 1
        return conn

    monkeypatch.setattr(db, "_open_connection", _open)
    db.reset_stats()
    return conn


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from main import app

    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def user() -> dict:
    return {"id": 7, "username": "jane", "email": "jane@example.com", "admin": False, "created": "2024-01-01T00:00:00+00:00"}


@pytest.fixture()
def admin() -> dict:
    return {"id": 1, "username": "admin", "email": "admin@example.com", "admin": True, "created": "2024-01-01T00:00:00+00:00"}


@pytest.fixture()
def login_as(client):
    from auth import dependencies as auth_dependencies
    from main import app

    def _login(current_user: dict) -> None:
        app.dependency_overrides[auth_dependencies.get_current_user] = lambda: current_user

    return _login
