"""JOIN clause: ordered join specifications."""

from __future__ import annotations
from typing import Any, Iterable, Optional

from pydantic import PrivateAttr

from ..errors import InvalidArgumentError
from ._bases import Expression
from .clause import ClauseExpression
from .conditional import ConditionalExpression
from .raw import RawExpression
from .source import TableSourceExpression, to_source

JOIN_TYPES = frozenset({
    "JOIN", "INNER JOIN",
    "LEFT JOIN", "LEFT OUTER JOIN",
    "RIGHT JOIN", "RIGHT OUTER JOIN",
    "FULL JOIN", "FULL OUTER JOIN",
    "CROSS JOIN", "NATURAL JOIN",
})
UNCONDITIONAL_JOIN_TYPES = frozenset({"CROSS JOIN", "NATURAL JOIN"})


class JoinSpecification(Expression):
    """One ``<type> <target> [ON condition | USING (columns)]`` entry."""

    join_type: str = "JOIN"
    target: TableSourceExpression
    condition: Optional[Expression] = None
    using: Optional[tuple[str, ...]] = None

    @property
    def sql(self) -> str:
        join_type = " ".join(self.join_type.upper().split())
        if join_type not in JOIN_TYPES:
            raise InvalidArgumentError(f"Unsupported join type: {self.join_type!r}")
        has_condition = self.condition is not None or self.using is not None
        if join_type in UNCONDITIONAL_JOIN_TYPES and has_condition:
            raise InvalidArgumentError(f"{join_type} does not accept a join condition")
        sql = f"{join_type} {self.target.sql}"
        if self.condition is not None:
            condition_sql = self.condition.sql
            if not condition_sql:
                raise InvalidArgumentError(f"{join_type} condition must not be empty")
            sql += f" ON {condition_sql}"
        elif self.using is not None:
            if not self.using or not all(self.using):
                raise InvalidArgumentError(f"{join_type} USING requires column names")
            sql += " USING (" + ", ".join(self.using) + ")"
        return sql

    @property
    def values(self) -> tuple[Any, ...]:
        values = self.target.values
        if self.condition is not None:
            values += self.condition.values
        return values

    def _children(self) -> Iterable[Expression]:
        yield self.target
        if self.condition is not None:
            yield self.condition


class JoinExpression(ClauseExpression):
    """Join specifications rendered in call order, separated by spaces.

    The condition may be a raw string, a ConditionalExpression, a callable
    receiving a fresh ConditionalExpression, any expression (``ON ...``), or a
    list of column names (``USING (...)``).
    """

    _joins: list[JoinSpecification] = PrivateAttr(default_factory=list)

    @property
    def joins(self) -> tuple[JoinSpecification, ...]:
        return tuple(self._joins)

    def append(
        self,
        join_type: str,
        table: Any,
        condition: Any = None,
        alias: Optional[str] = None,
    ) -> JoinExpression:
        on: Optional[Expression] = None
        using: Optional[tuple[str, ...]] = None
        if condition is None:
            pass
        elif isinstance(condition, (list, tuple)):
            using = tuple(condition)
        elif isinstance(condition, Expression):
            on = condition
        elif isinstance(condition, str):
            on = RawExpression(text=condition)
        elif callable(condition):
            group = ConditionalExpression()
            result = condition(group)
            on = result if isinstance(result, ConditionalExpression) else group
        else:
            raise InvalidArgumentError(f"Cannot build a join condition from {condition!r}")
        self._joins.append(
            JoinSpecification(join_type=join_type, target=to_source(table, alias), condition=on, using=using)
        )
        self._touch()
        return self

    def is_empty(self) -> bool:
        return not self._joins

    def _children(self) -> Iterable[Expression]:
        return iter(self._joins)

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        sql = " ".join(join.sql for join in self._joins)
        values = sum((join.values for join in self._joins), ())
        return sql, values
