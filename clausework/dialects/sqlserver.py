"""SQL Server dialect."""

from typing import ClassVar

from .base import DatabaseUrl, Dialect, parse_database_url


class SqlserverDialect(Dialect):
    """Dialect for SQL Server (schemes mssql, sqlserver); pyodbc uses ``?`` placeholders."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mssql", "sqlserver")
    PARAMSTYLE: ClassVar[str] = "qmark"
    DEFAULT_PORT: ClassVar[int] = 1433
    DEFAULT_DRIVER: ClassVar[str] = "ODBC Driver 17 for SQL Server"

    def connection_string(self, parts: DatabaseUrl) -> str:
        """ODBC connection string; ``?driver=...`` picks the ODBC driver, other query items are appended."""
        options = dict(parts.options)
        driver = options.pop("driver", self.DEFAULT_DRIVER)
        server = parts.host or "localhost"
        if parts.port and parts.port != self.DEFAULT_PORT:
            server = f"{server},{parts.port}"
        items = {
            "DRIVER": f"{{{driver}}}",
            "SERVER": server,
            "DATABASE": parts.database or "",
            "UID": parts.user or "",
            "PWD": parts.password or "",
        }
        items.update((key.upper(), value) for key, value in options.items())
        return ";".join(f"{key}={value}" for key, value in items.items())

    def connect(self, url: str):
        import pyodbc  # pylint: disable=import-outside-toplevel,import-error
        return pyodbc.connect(self.connection_string(parse_database_url(url)))
