"""Column lists: SELECT items, GROUP BY items, RETURNING items, INSERT columns."""

from __future__ import annotations
from typing import Any, Optional

from .alias import AliasExpression
from .clause import ListExpression
from .identifier import to_expression


class SelectExpression(ListExpression):
    """Items of a SELECT list; subqueries are parenthesised, aliases rendered with AS."""

    def append(self, column: Any, alias: Optional[str] = None) -> SelectExpression:
        expression = to_expression(column)
        if alias is not None:
            expression = AliasExpression(expression=expression, alias=alias)
        return super().append(expression)


class ReturningExpression(SelectExpression):
    """Items of a RETURNING list."""


class GroupExpression(ListExpression):
    """Items of a GROUP BY clause."""

    def append(self, column: Any) -> GroupExpression:
        return super().append(to_expression(column))


class ColumnListExpression(ListExpression):
    """Target columns of an INSERT statement."""

    def append(self, column: Any) -> ColumnListExpression:
        return super().append(to_expression(column))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(item.sql for item in self._items)
