"""clausework: a fluent, parameterised SQL query builder built on Pydantic."""

from .connection import connect, disconnect, get_executor
from .errors import ConfigurationError, InvalidArgumentError, QueryBuilderError, TransactionError
from .executor import ConnectionExecutor, QueryExecutor
from .expressions import col, func, param, raw
from .queries import DeleteQuery, InsertQuery, SelectQuery, UpdateQuery
from .transaction import transaction

__all__ = [
    "ConfigurationError",
    "ConnectionExecutor",
    "DeleteQuery",
    "InsertQuery",
    "InvalidArgumentError",
    "QueryBuilderError",
    "QueryExecutor",
    "SelectQuery",
    "TransactionError",
    "UpdateQuery",
    "col",
    "connect",
    "disconnect",
    "func",
    "get_executor",
    "param",
    "raw",
    "transaction",
]
