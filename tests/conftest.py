"""
Pytest configuration for the botaguas inventory tests.

This file adds the project root to the Python path so that tests can import
from the domain, repositories, services and api modules, and provides an
in-memory stand-in for the Supabase table query builder.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest
from postgrest.exceptions import APIError

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from repositories.auth_repository import OperatorContext  # noqa: E402


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]) -> None:
        self.data = data
        self.error = None
        self.count = len(data)


class FakeQuery:
    """Supports the subset of the postgrest builder the repositories use."""

    def __init__(self, store: "FakeSupabase", table: str) -> None:
        self._store = store
        self._table = table
        self._op = "select"
        self._payload: Any = None
        self._filters: List[Tuple[str, Any]] = []
        self._limit: Optional[int] = None
        self._order: Optional[str] = None

    def select(self, columns: str = "*") -> "FakeQuery":
        self._op = "select"
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self._op = "update"
        self._payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def limit(self, n: int) -> "FakeQuery":
        self._limit = n
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = column
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> FakeResponse:
        self._store.calls.append((self._table, self._op, tuple(self._filters)))
        failure = self._store.failures.get(self._op)
        if failure is not None:
            raise failure

        rows = self._store.tables.setdefault(self._table, [])

        if self._op == "select":
            found = [dict(r) for r in rows if self._matches(r)]
            if self._order:
                found.sort(key=lambda r: r[self._order])
            if self._limit is not None:
                found = found[: self._limit]
            return FakeResponse(found)

        if self._op == "insert":
            payloads = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for payload in payloads:
                for column in self._store.unique_columns:
                    if any(r.get(column) == payload.get(column) for r in rows):
                        raise APIError({
                            "message": f"duplicate key value violates unique constraint on {column}",
                            "code": "23505",
                        })
                row = dict(payload)
                row["id"] = self._store.next_id
                self._store.next_id += 1
                rows.append(row)
                inserted.append(dict(row))
            return FakeResponse(inserted)

        if self._op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self._payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        if self._op == "delete":
            removed = [dict(r) for r in rows if self._matches(r)]
            self._store.tables[self._table] = [r for r in rows if not self._matches(r)]
            return FakeResponse(removed)

        raise AssertionError(f"unsupported operation {self._op}")


class FakeSession:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakePostgrest:
    def __init__(self) -> None:
        self.session = FakeSession()


class FakeSupabase:
    """In-memory tables keyed by name; rows get sequential integer ids on insert."""

    def __init__(self) -> None:
        self.postgrest = FakePostgrest()
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str, tuple]] = []
        self.failures: Dict[str, Exception] = {}
        self.unique_columns: List[str] = []
        self.next_id = 1

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, rows: List[Dict[str, Any]]) -> None:
        for row in rows:
            stored = dict(row)
            stored.setdefault("id", self.next_id)
            self.next_id = max(self.next_id, stored["id"]) + 1
            self.tables.setdefault(table, []).append(stored)

    def ops(self, op: str) -> int:
        return sum(1 for _, called_op, _ in self.calls if called_op == op)


def make_row(**overrides: Any) -> Dict[str, Any]:
    row = {
        "brand": "FORD",
        "model": "FOCUS",
        "year_start": 2010,
        "year_end": 2015,
        "doors": 4,
        "type": "Parche",
        "quantity": 5,
        "description": "",
        "mold_number": "M-001",
    }
    row.update(overrides)
    return row


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def operator(fake_supabase: FakeSupabase) -> OperatorContext:
    return OperatorContext(client=fake_supabase, operator_id="operator-1", email="ops@example.com")


@pytest.fixture
def row_factory():
    return make_row
