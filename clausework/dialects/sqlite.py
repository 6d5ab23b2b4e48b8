"""SQLite dialect."""

import logging
import sqlite3
from typing import ClassVar

from .base import Dialect, parse_database_url

logger = logging.getLogger(__name__)


class SqliteDialect(Dialect):
    """Dialect for SQLite (scheme sqlite).

    ``sqlite:////abs/path.db`` opens a file, ``sqlite:///:memory:`` (or a bare
    ``sqlite://``) an in-memory database. Foreign keys are enforced.
    """

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("sqlite",)
    PARAMSTYLE: ClassVar[str] = "qmark"

    def connect(self, url: str):
        parts = parse_database_url(url)
        path = parts.database or parts.host or ":memory:"
        logger.info("Connecting to SQLite database %s", path)
        connection = sqlite3.connect(path)
        connection.execute("PRAGMA foreign_keys = ON")
        return connection
