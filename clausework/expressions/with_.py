"""WITH clause: common table expressions."""

from __future__ import annotations
from typing import Any, Iterable

from pydantic import PrivateAttr

from ..errors import InvalidArgumentError
from ._bases import Expression
from .clause import ClauseExpression


class WithExpression(ClauseExpression):
    """``[RECURSIVE] name AS (query), ...``; the owning query emits ``WITH``."""

    recursive: bool = False

    _tables: list[tuple[str, Expression]] = PrivateAttr(default_factory=list)

    def append(self, name: str, query: Expression, recursive: bool = False) -> WithExpression:
        self._tables.append((name, query))
        if recursive:
            self.recursive = True
        self._touch()
        return self

    def is_empty(self) -> bool:
        return not self._tables

    def _children(self) -> Iterable[Expression]:
        return (query for _, query in self._tables)

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        parts: list[str] = []
        values: tuple[Any, ...] = ()
        for name, query in self._tables:
            if not name or not str(name).strip():
                raise InvalidArgumentError("Common table expression must have a name")
            parts.append(f"{name} AS ({query.sql})")
            values += query.values
        sql = ", ".join(parts)
        if self.recursive and sql:
            sql = "RECURSIVE " + sql
        return sql, values
