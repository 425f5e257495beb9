"""
Shared fixtures: an in-memory stand-in for core.db.Database and an HTTP client
wired to the app with that fake injected through `get_db`.
"""

import re
from datetime import datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from core.db import get_db
from main import create_app

_INSERT = re.compile(r"INSERT INTO\s+(\w+)\s*\(([^)]*)\)", re.IGNORECASE)
_SELECT = re.compile(r"SELECT\s+(.*?)\s+FROM\s+(\w+)", re.IGNORECASE | re.DOTALL)
_DELETE = re.compile(r"DELETE FROM\s+(\w+)", re.IGNORECASE)


class StorageError(Exception):
    pass


class FakeDatabase:
    """
    Understands the three statement shapes issued by crud.repository.

    Rows get increasing ids and created_at values, so list order is predictable.
    Set `fail` to make every call raise, like a lost connection.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self.fail = False
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, 12, 0, 0)

    def _record(self, kind: str, sql: str, args: tuple[Any, ...]) -> None:
        self.calls.append((kind, sql, args))
        if self.fail:
            raise StorageError("connection refused")

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self._record("fetch_all", sql, args)
        match = _SELECT.search(sql)
        assert match, sql
        columns = [c.strip() for c in match.group(1).split(",")]
        rows = sorted(self.tables.get(match.group(2), []), key=lambda r: r["created_at"], reverse=True)
        return [{c: row.get(c) for c in columns} for row in rows]

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self._record("fetch_one", sql, args)
        match = _INSERT.search(sql)
        assert match, sql
        table = match.group(1)
        columns = [c.strip() for c in match.group(2).split(",")]
        row = {"id": self._next_id, **dict(zip(columns, args)), "created_at": self._clock}
        self._next_id += 1
        self._clock += timedelta(seconds=1)
        self.tables.setdefault(table, []).append(row)
        return dict(row)

    async def execute(self, sql: str, *args: Any) -> str:
        self._record("execute", sql, args)
        match = _DELETE.search(sql)
        if match is None:
            return "CREATE TABLE"
        # Mirrors Postgres: a non-numeric text id fails the integer cast.
        try:
            row_id = int(args[0])
        except ValueError as exc:
            raise StorageError(f'invalid input syntax for type integer: "{args[0]}"') from exc
        rows = self.tables.get(match.group(1), [])
        kept = [r for r in rows if r["id"] != row_id]
        self.tables[match.group(1)] = kept
        return f"DELETE {len(rows) - len(kept)}"


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def app(fake_db):
    application = create_app()
    application.dependency_overrides[get_db] = lambda: fake_db
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
