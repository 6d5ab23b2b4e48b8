"""Tests for clausework.executor: QueryExecutor protocol and ConnectionExecutor."""

import logging
import sqlite3

import pytest

from clausework.dialects import PostgresDialect
from clausework.executor import ConnectionExecutor, QueryExecutor


class FakeCursor:

    def __init__(self, connection):
        self.connection = connection
        self.rowcount = 3
        self.description = (("id",), ("name",))
        self.closed = False

    def execute(self, sql, params):
        self.connection.statements.append((sql, params))

    def fetchall(self):
        return [(1, "Alice")]

    def close(self):
        self.closed = True


class FakeConnection:

    def __init__(self):
        self.statements = []
        self.cursors = []

    def cursor(self):
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor


def test_executors_satisfy_the_protocol(db, recorder):
    assert isinstance(db, QueryExecutor)
    assert isinstance(recorder, QueryExecutor)


def test_placeholders_are_converted_for_format_drivers():
    connection = FakeConnection()
    executor = ConnectionExecutor(connection, PostgresDialect())
    count = executor.update("users").assign("name", "Bob").where("id", "=", 5).exec()
    assert count == 3
    assert connection.statements == [("UPDATE users SET name = %s WHERE id = %s", ("Bob", 5))]
    assert all(cursor.closed for cursor in connection.cursors)


def test_query_rows_as_tuples_or_dicts():
    executor = ConnectionExecutor(FakeConnection(), PostgresDialect())
    assert executor.query("SELECT id, name FROM users") == [(1, "Alice")]
    assert executor.query("SELECT id, name FROM users", rows_as_dicts=True) == [{"id": 1, "name": "Alice"}]


def test_sqlite_execute_and_query(db):
    assert db.execute("UPDATE users SET status = ? WHERE age > ?", ["adult", 18]) == 2
    rows = db.query("SELECT name, status FROM users WHERE id = ?", [1], rows_as_dicts=True)
    assert rows == [{"name": "Alice", "status": "adult"}]


def test_driver_errors_propagate(db):
    with pytest.raises(sqlite3.OperationalError):
        db.query("SELECT * FROM no_such_table")


def test_statements_are_logged(db, caplog):
    caplog.set_level(logging.DEBUG, logger="clausework")
    db.select("name").from_("users").where("id", "=", 2).fetch()
    messages = [record.getMessage() for record in caplog.records]
    assert any("SELECT name FROM users WHERE id = ?" in message and "(2,)" in message for message in messages)


def test_commit_rollback_and_close():
    executor = ConnectionExecutor(sqlite3.connect(":memory:"))
    executor.execute("CREATE TABLE t (x INTEGER)")
    executor.insert("t").row({"x": 1}).exec()
    executor.rollback()
    assert executor.select("COUNT(*)").from_("t").scalar() == 0
    executor.insert("t").row({"x": 1}).exec()
    executor.commit()
    assert executor.select("COUNT(*)").from_("t").scalar() == 1
    with executor:
        pass
    with pytest.raises(sqlite3.ProgrammingError):
        executor.query("SELECT 1")
