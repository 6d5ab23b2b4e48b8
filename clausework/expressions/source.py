"""FROM clause: table sources and subqueries with optional aliases."""

from __future__ import annotations
from typing import Any, Iterable, Optional

from ._bases import Expression, operand_to_sql
from .clause import ListExpression
from .identifier import to_expression


class TableSourceExpression(Expression):
    """A table name, raw fragment or subquery, optionally followed by an alias (``users u``)."""

    source: Expression
    alias: Optional[str] = None

    @property
    def sql(self) -> str:
        sql = operand_to_sql(self.source)
        if self.alias:
            sql += f" {self.alias}"
        return sql

    @property
    def values(self) -> tuple[Any, ...]:
        return self.source.values

    def _children(self) -> Iterable[Expression]:
        yield self.source


def to_source(table: Any, alias: Optional[str] = None) -> TableSourceExpression:
    """Wrap a table argument (name, expression or subquery) as a source."""
    if isinstance(table, TableSourceExpression) and alias is None:
        return table
    return TableSourceExpression(source=to_expression(table), alias=alias)


class FromExpression(ListExpression):
    """Table sources of a FROM clause (or the target of UPDATE/DELETE), comma separated."""

    def append(self, table: Any, alias: Optional[str] = None) -> FromExpression:
        return super().append(to_source(table, alias))
