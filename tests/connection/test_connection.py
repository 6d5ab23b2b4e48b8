"""Tests for clausework.connection: connect(), disconnect(), get_executor() and database URL handling."""

import pytest

from clausework.connection import connect, disconnect, get_executor
from clausework.errors import ConfigurationError
from clausework.executor import ConnectionExecutor


@pytest.fixture
def names():
    """Names registered by a test; unregistered afterwards."""
    registered = []
    yield registered
    for name in registered:
        disconnect(name)


def test_connect_rejects_non_string_non_callable():
    with pytest.raises(ConfigurationError, match="database_url.*str.*or a method"):
        connect(123, name="bad")
    with pytest.raises(ConfigurationError, match="database_url.*str.*or a method"):
        connect([], name="bad")


def test_get_executor_unknown_name():
    with pytest.raises(ConfigurationError, match="No connection configured with name=`missing`"):
        get_executor("missing")


def test_get_executor_opens_a_new_connection_each_time(tmp_path, names):
    path = tmp_path / "db.sqlite3"
    names.append("file_db")
    connect(f"sqlite:///{path}", name="file_db")
    with get_executor("file_db") as executor:
        assert isinstance(executor, ConnectionExecutor)
        executor.execute("CREATE TABLE foo (bar TEXT)")
        executor.insert("foo").row({"bar": "baz"}).exec()
        executor.commit()
    with get_executor("file_db") as executor:
        assert executor.select("bar").from_("foo").fetch() == [("baz",)]


def test_callable_url_is_resolved_on_every_call(tmp_path, names):
    calls = []

    def url_factory():
        calls.append(1)
        return f"sqlite:///{tmp_path / 'callable.sqlite3'}"

    names.append("callable_db")
    connect(url_factory, name="callable_db")
    assert calls == []
    get_executor("callable_db").close()
    get_executor("callable_db").close()
    assert len(calls) == 2


def test_disconnect(names):
    names.append("temporary")
    connect("sqlite:///:memory:", name="temporary")
    get_executor("temporary").close()
    disconnect("temporary")
    with pytest.raises(ConfigurationError):
        get_executor("temporary")
    disconnect("temporary")


def test_unsupported_scheme(names):
    names.append("oracle_db")
    connect("oracle://localhost/db", name="oracle_db")
    with pytest.raises(ValueError, match="Unsupported database scheme"):
        get_executor("oracle_db")
