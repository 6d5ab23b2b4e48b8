"""PostgreSQL dialect."""

from typing import ClassVar

from .base import Dialect, parse_database_url


class PostgresDialect(Dialect):
    """Dialect for PostgreSQL (schemes postgresql, postgres); psycopg2 uses the ``format`` paramstyle.

    URL query items (``?sslmode=require``) are passed to ``psycopg2.connect``.
    """

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("postgresql", "postgres")
    PARAMSTYLE: ClassVar[str] = "format"

    def connect(self, url: str):
        import psycopg2  # pylint: disable=import-outside-toplevel,import-error
        parts = parse_database_url(url)
        parameters = {
            "host": parts.host,
            "port": parts.port,
            "user": parts.user,
            "password": parts.password,
            "dbname": parts.database,
        }
        parameters = {key: value for key, value in parameters.items() if value is not None}
        return psycopg2.connect(**parameters, **parts.options)
