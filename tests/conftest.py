import sqlite3

import pytest

from clausework.executor import ConnectionExecutor, QueryFactoryMixin


class RecordingExecutor(QueryFactoryMixin):
    """Fake QueryExecutor: records every call and returns canned results."""

    def __init__(self, rows=None, rowcount=1):
        self.calls = []
        self.rows = list(rows or [])
        self.rowcount = rowcount

    def execute(self, sql, params=()):
        self.calls.append(("execute", sql, list(params)))
        return self.rowcount

    def query(self, sql, params=()):
        self.calls.append(("query", sql, list(params)))
        return list(self.rows)


@pytest.fixture
def recorder():
    """A recording fake executor with no rows."""
    return RecordingExecutor()


@pytest.fixture
def db():
    """In-memory SQLite executor with a small `users` / `orders` schema."""
    executor = ConnectionExecutor(sqlite3.connect(":memory:"))
    executor.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER, status TEXT, counter INTEGER DEFAULT 0)"
    )
    executor.execute(
        "CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users(id), total REAL)"
    )
    executor.execute(
        "INSERT INTO users (id, name, age, status) VALUES (1, 'Alice', 30, 'active'), "
        "(2, 'Bob', 17, 'new'), (3, 'Carol', 45, 'active')"
    )
    executor.execute(
        "INSERT INTO orders (id, user_id, total) VALUES (1, 1, 10.0), (2, 1, 25.5), (3, 3, 7.25)"
    )
    executor.commit()
    yield executor
    executor.close()
