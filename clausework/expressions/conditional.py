"""Conditions and condition chains for WHERE, HAVING and JOIN ... ON."""

from __future__ import annotations
from typing import Any, Callable, Iterable, Optional

from pydantic import PrivateAttr

from ..errors import InvalidArgumentError
from ._bases import ComposedExpression, Expression, operand_children, operand_to_sql, operand_to_values
from .clause import ClauseExpression
from .identifier import to_expression
from .parenthesized import ParenthesizedExpression
from .raw import RawExpression
from .operators import UnaryOperatorExpression

OPERATORS = frozenset({
    "=", "!=", "<>", "<", "<=", ">", ">=",
    "LIKE", "NOT LIKE", "ILIKE", "NOT ILIKE",
    "IN", "NOT IN",
    "IS", "IS NOT",
    "BETWEEN", "NOT BETWEEN",
})
CONNECTORS = frozenset({"AND", "OR"})


def normalize_operator(operator: Any) -> str:
    """Upper-case an operator and collapse inner whitespace (``"not  in"`` -> ``"NOT IN"``)."""
    if not isinstance(operator, str):
        raise InvalidArgumentError(f"Operator must be a string; got {operator!r}")
    normalized = " ".join(operator.upper().split())
    if normalized not in OPERATORS:
        raise InvalidArgumentError(f"Unsupported operator: {operator!r}")
    return normalized


class ConditionExpression(ComposedExpression):
    """A single predicate: ``column operator value``.

    ``value`` is bound unless it is an expression (rendered inline) or a
    statement (rendered as a parenthesised subquery). ``None`` turns ``=`` and
    ``IS`` into ``IS NULL``, and ``!=``, ``<>``, ``IS NOT`` into ``IS NOT NULL``.
    """

    column: Expression
    operator: str = "="
    value: Any = None

    def _children(self) -> Iterable[Expression]:
        yield self.column
        yield from operand_children(self.value)

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        column_sql = operand_to_sql(self.column)
        column_values = self.column.values
        operator = normalize_operator(self.operator)
        value = self.value

        if value is None:
            if operator in ("=", "IS"):
                return f"{column_sql} IS NULL", column_values
            if operator in ("!=", "<>", "IS NOT"):
                return f"{column_sql} IS NOT NULL", column_values
            raise InvalidArgumentError(f"Operator {operator} cannot be compared with NULL")

        if operator in ("IN", "NOT IN"):
            if isinstance(value, Expression):
                value_sql = operand_to_sql(value)
                values = value.values
            else:
                if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
                    raise InvalidArgumentError(f"{operator} requires a list or a subquery; got {value!r}")
                items = tuple(value)
                if not items:
                    raise InvalidArgumentError(f"{operator} requires a non-empty list")
                value_sql = operand_to_sql(items)
                values = operand_to_values(items)
        elif operator in ("BETWEEN", "NOT BETWEEN"):
            if not isinstance(value, (list, tuple)) or len(value) != 2:
                raise InvalidArgumentError(f"{operator} requires exactly two bounds; got {value!r}")
            low, high = value
            value_sql = f"{self._scalar_sql(low)} AND {self._scalar_sql(high)}"
            values = self._scalar_values(low) + self._scalar_values(high)
        else:
            value_sql = self._scalar_sql(value)
            values = self._scalar_values(value)

        return f"{column_sql} {operator} {value_sql}", column_values + values

    @staticmethod
    def _scalar_sql(value: Any) -> str:
        return operand_to_sql(value) if isinstance(value, Expression) else "?"

    @staticmethod
    def _scalar_values(value: Any) -> tuple[Any, ...]:
        return value.values if isinstance(value, Expression) else (value,)


class ConditionalExpression(ClauseExpression):
    """Chain of conditions joined by AND/OR, in append order.

    The connector of the first condition is ignored. Conditions are concatenated
    left to right without implicit grouping (``a OR b AND c`` follows SQL
    precedence); pass a callable or another ConditionalExpression to get an
    explicit parenthesised group.
    """

    _conditions: list[tuple[str, Expression]] = PrivateAttr(default_factory=list)

    def where(
        self,
        column: Any,
        operator: Optional[str] = None,
        value: Any = None,
        connector: str = "AND",
    ) -> ConditionalExpression:
        """Append a condition.

        Examples:
            where("id", "=", 5)
            where("id", "IN", [1, 2, 3])
            where("age", "BETWEEN", (18, 65))
            where("deleted_at", "IS", None)
            where({"status": "active", "role": "admin"})
            where(lambda c: c.where("a", "=", 1).or_where("b", "=", 2))
            where("price > cost")
        """
        condition = self._make_condition(column, operator, value)
        self._conditions.append((connector, condition))
        self._touch()
        return self

    def and_where(self, column: Any, operator: Optional[str] = None, value: Any = None) -> ConditionalExpression:
        return self.where(column, operator, value, connector="AND")

    def or_where(self, column: Any, operator: Optional[str] = None, value: Any = None) -> ConditionalExpression:
        return self.where(column, operator, value, connector="OR")

    def where_exists(self, query: Expression, connector: str = "AND") -> ConditionalExpression:
        """Append ``EXISTS (subquery)``."""
        return self.where(UnaryOperatorExpression(symbol="EXISTS", arguments=(query,)), connector=connector)

    def where_not_exists(self, query: Expression, connector: str = "AND") -> ConditionalExpression:
        """Append ``NOT EXISTS (subquery)``."""
        return self.where(UnaryOperatorExpression(symbol="NOT EXISTS", arguments=(query,)), connector=connector)

    def is_empty(self) -> bool:
        return not self._conditions

    def _make_condition(self, column: Any, operator: Optional[str], value: Any) -> Expression:
        if operator is None and value is None:
            if isinstance(column, ConditionalExpression):
                return ParenthesizedExpression(inner=column)
            if isinstance(column, Expression):
                return ParenthesizedExpression(inner=column) if column.SUBQUERY else column
            if isinstance(column, dict):
                group = ConditionalExpression()
                for name, item in column.items():
                    group.where(name, "=", item)
                return ParenthesizedExpression(inner=group) if len(column) != 1 else group
            if callable(column):
                return ParenthesizedExpression(inner=self._group_from_callable(column))
            if isinstance(column, str):
                return RawExpression(text=column)
            raise InvalidArgumentError(f"Cannot build a condition from {column!r}")
        return ConditionExpression(column=to_expression(column), operator=operator or "=", value=value)

    @staticmethod
    def _group_from_callable(builder: Callable[[ConditionalExpression], Any]) -> ConditionalExpression:
        group = ConditionalExpression()
        result = builder(group)
        if isinstance(result, ConditionalExpression):
            return result
        return group

    def _children(self) -> Iterable[Expression]:
        return (condition for _, condition in self._conditions)

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        parts: list[str] = []
        values: tuple[Any, ...] = ()
        for connector, condition in self._conditions:
            condition_sql = condition.sql
            if not condition_sql:
                raise InvalidArgumentError("Condition group must not be empty")
            if parts:
                normalized = str(connector).upper()
                if normalized not in CONNECTORS:
                    raise InvalidArgumentError(f"Unsupported connector: {connector!r}")
                parts.append(normalized)
            parts.append(condition_sql)
            values += condition.values
        return " ".join(parts), values


class WhereExpression(ConditionalExpression):
    """Conditions of a WHERE clause."""


class HavingExpression(ConditionalExpression):
    """Conditions of a HAVING clause."""
