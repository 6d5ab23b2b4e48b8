"""Parenthesised wrapper for nested condition groups and subqueries."""

from typing import Iterable

from ..errors import InvalidArgumentError
from ._bases import Expression


class ParenthesizedExpression(Expression):
    """Renders ``(inner)``; the inner expression keeps its own values."""

    inner: Expression

    @property
    def sql(self) -> str:
        inner_sql = self.inner.sql
        if not inner_sql:
            raise InvalidArgumentError("Parenthesised group must not be empty")
        return f"({inner_sql})"

    @property
    def values(self):
        return self.inner.values

    def _children(self) -> Iterable[Expression]:
        yield self.inner
