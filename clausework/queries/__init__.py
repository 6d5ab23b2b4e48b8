"""Statement builders: SELECT, INSERT, UPDATE and DELETE."""

from .base import AbstractQuery
from .delete import DeleteQuery
from .insert import InsertQuery
from .select import SelectQuery
from .update import UpdateQuery

__all__ = [
    "AbstractQuery",
    "DeleteQuery",
    "InsertQuery",
    "SelectQuery",
    "UpdateQuery",
]
