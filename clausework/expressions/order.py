"""ORDER BY clause."""

from __future__ import annotations
from typing import Any, Iterable

from ..errors import InvalidArgumentError
from ._bases import Expression, operand_to_sql
from .clause import ListExpression
from .identifier import to_expression

DIRECTIONS = frozenset({
    "ASC", "DESC",
    "ASC NULLS FIRST", "ASC NULLS LAST",
    "DESC NULLS FIRST", "DESC NULLS LAST",
})


class SortExpression(Expression):
    """ORDER BY spec: one expression and its direction."""

    expression: Expression
    direction: str = "ASC"

    @property
    def sql(self) -> str:
        direction = " ".join(str(self.direction).upper().split())
        if direction not in DIRECTIONS:
            raise InvalidArgumentError(f"Unsupported sort direction: {self.direction!r}")
        return f"{operand_to_sql(self.expression)} {direction}"

    @property
    def values(self) -> tuple[Any, ...]:
        return self.expression.values

    def _children(self) -> Iterable[Expression]:
        yield self.expression


class OrderExpression(ListExpression):
    """Sort specs of an ORDER BY clause, in append order."""

    def append(self, column: Any, direction: str = "ASC") -> OrderExpression:
        if isinstance(column, SortExpression):
            return super().append(column)
        if isinstance(column, dict):
            for name, name_direction in column.items():
                self.append(name, name_direction)
            return self
        return super().append(SortExpression(expression=to_expression(column), direction=direction))
