"""Query executors: the boundary between statement builders and a database driver."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from .dialects import Dialect, SqliteDialect
from .queries import DeleteQuery, InsertQuery, SelectQuery, UpdateQuery

logger = logging.getLogger("clausework")


@runtime_checkable
class QueryExecutor(Protocol):
    """What a statement needs to run: the core never opens connections itself."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a data-modifying statement and return the affected row count."""
        ...  # pylint: disable=unnecessary-ellipsis

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[Any]:
        """Run a read statement and return its rows."""
        ...  # pylint: disable=unnecessary-ellipsis


class QueryFactoryMixin:
    """Start statements already bound to this executor (``db.update("users").assign(...)``)."""

    def select(self, *columns: Any, **aliased: Any) -> SelectQuery:
        return SelectQuery(executor=self).select(*columns, **aliased)

    def insert(self, table: Any = None) -> InsertQuery:
        query = InsertQuery(executor=self)
        return query.into(table) if table is not None else query

    def update(self, table: Any = None, alias: Optional[str] = None) -> UpdateQuery:
        query = UpdateQuery(executor=self)
        return query.table(table, alias) if table is not None else query

    def delete(self, table: Any = None, alias: Optional[str] = None) -> DeleteQuery:
        query = DeleteQuery(executor=self)
        return query.table(table, alias) if table is not None else query


class ConnectionExecutor(QueryFactoryMixin):
    """QueryExecutor over a DB-API 2.0 connection.

    Placeholders are converted through the dialect before reaching the driver.
    Driver errors are not caught: they reach the caller unchanged.
    """

    def __init__(self, connection: Any, dialect: Optional[Dialect] = None):
        """
        Args:
            connection: An open DB-API connection (sqlite3, psycopg2, pymysql, pyodbc).
            dialect: Dialect of that connection; defaults to SQLite.
        """
        self.connection = connection
        self.dialect = dialect or SqliteDialect()

    def _run(self, sql: str, params: Optional[Sequence[Any]]):
        statement = self.dialect.convert_placeholders(sql)
        parameters = tuple(params or ())
        logger.debug("%s %r", statement, parameters)
        cursor = self.connection.cursor()
        try:
            cursor.execute(statement, parameters)
        except Exception:
            cursor.close()
            raise
        return cursor

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        cursor = self._run(sql, params)
        try:
            return cursor.rowcount
        finally:
            cursor.close()

    def query(
        self,
        sql: str,
        params: Optional[Sequence[Any]] = None,
        rows_as_dicts: bool = False,
    ) -> list[Any]:
        """Run a statement and fetch all rows, as tuples or as dicts keyed by column name."""
        cursor = self._run(sql, params)
        try:
            rows = cursor.fetchall()
            if rows_as_dicts:
                names = [description[0] for description in cursor.description or ()]
                return [dict(zip(names, row)) for row in rows]
            return [tuple(row) for row in rows]
        finally:
            cursor.close()

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> ConnectionExecutor:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
