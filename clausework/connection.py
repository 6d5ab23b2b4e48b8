"""Named database URLs and the executors opened from them."""

import logging
import urllib.parse
from typing import Callable, Union

from .dialects import get_dialect_for_scheme
from .errors import ConfigurationError
from .executor import ConnectionExecutor

logger = logging.getLogger("clausework")

DatabaseUrl = Union[str, Callable[[], str]]

_urls: dict[str, DatabaseUrl] = {}


def connect(database_url: DatabaseUrl, name: str = "default") -> None:
    """Register a database URL (or a method returning one) under a name."""
    if not isinstance(database_url, str) and not callable(database_url):
        raise ConfigurationError(
            f"database_url must be a str or a method returning a str; got {type(database_url).__name__}"
        )
    _urls[name] = database_url


def disconnect(name: str = "default") -> None:
    """Forget the URL registered under a name (no-op if there is none)."""
    _urls.pop(name, None)


def _get_url(name: str) -> str:
    try:
        url = _urls[name]
    except KeyError as error:
        raise ConfigurationError(f"No connection configured with name=`{name}`") from error
    return url() if callable(url) else url


def get_executor(name: str = "default") -> ConnectionExecutor:
    """Open a new connection for the named URL and wrap it in an executor."""
    url = _get_url(name)
    dialect = get_dialect_for_scheme(urllib.parse.urlparse(url).scheme)
    logger.info("Opening %s connection `%s`", type(dialect).__name__, name)
    return ConnectionExecutor(dialect.connect(url), dialect)
