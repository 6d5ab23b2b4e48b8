"""Aliased expression for select and returning lists."""

from typing import Iterable

from ..errors import InvalidArgumentError
from ._bases import Expression, operand_to_sql


class AliasExpression(Expression):
    """``expression AS alias``; subqueries are parenthesised."""

    expression: Expression
    alias: str

    @property
    def sql(self) -> str:
        if not self.alias:
            raise InvalidArgumentError("Alias must not be empty")
        return f"{operand_to_sql(self.expression)} AS {self.alias}"

    @property
    def values(self):
        return self.expression.values

    def _children(self) -> Iterable[Expression]:
        yield self.expression
