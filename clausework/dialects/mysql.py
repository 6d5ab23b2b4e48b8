"""MySQL dialect."""

from typing import ClassVar

from .base import Dialect, parse_database_url


class MysqlDialect(Dialect):
    """Dialect for MySQL (scheme mysql); pymysql uses the ``format`` paramstyle.

    URL query items (``?charset=utf8mb4``) are passed to ``pymysql.connect``.
    """

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mysql",)
    PARAMSTYLE: ClassVar[str] = "format"
    DEFAULT_PORT: ClassVar[int] = 3306

    def connect(self, url: str):
        import pymysql  # pylint: disable=import-outside-toplevel,import-error
        parts = parse_database_url(url)
        return pymysql.connect(
            host=parts.host or "localhost",
            port=parts.port or self.DEFAULT_PORT,
            user=parts.user,
            password=parts.password or "",
            database=parts.database,
            **parts.options,
        )
