"""SQL expression types for query building.

Every node renders to a SQL fragment with ``?`` placeholders (``.sql``) and the
bound values in the same order (``.values``); ``render()`` returns both as
``(sql, params)``. Clause builders (WHERE, JOIN, ORDER BY, ...) are expressions
too, so nesting a clause or a whole statement keeps placeholders and values
aligned. Combine nodes with operators (``==``, ``<``, ``.in_(...)``) and logic
(``&``, ``|``, ``~``).
"""

from typing import Any

from ._bases import ArgumentedExpression, ComposedExpression, Expression
from .alias import AliasExpression
from .assignment import AssignmentExpression
from .clause import ClauseExpression, ListExpression
from .conditional import (
    ConditionExpression,
    ConditionalExpression,
    HavingExpression,
    WhereExpression,
)
from .identifier import IdentifierExpression, to_expression
from .join import JoinExpression, JoinSpecification
from .operators import FunctionExpression, NaryOperatorExpression, UnaryOperatorExpression
from .order import OrderExpression, SortExpression
from .parenthesized import ParenthesizedExpression
from .raw import ParameterExpression, RawExpression
from .select_list import ColumnListExpression, GroupExpression, ReturningExpression, SelectExpression
from .source import FromExpression, TableSourceExpression
from .value_list import ValueListExpression
from .with_ import WithExpression


def col(name: str) -> IdentifierExpression:
    """Reference a column or table by name (e.g. ``col("u.id") == 5``)."""
    return IdentifierExpression(name=name)


def raw(sql: str, *values: Any) -> RawExpression:
    """Verbatim SQL with optional bound values (e.g. ``raw("counter + ?", 1)``)."""
    return RawExpression(text=sql, parameters=values)


def param(value: Any) -> ParameterExpression:
    """A single bound value, for places where a bare literal would be read as a name."""
    return ParameterExpression(value=value)


def func(name: str, *arguments: Any, distinct: bool = False) -> FunctionExpression:
    """SQL function call (e.g. ``func("COUNT", raw("*"))``, ``func("COUNT", col("city"), distinct=True)``)."""
    return FunctionExpression(symbol=name, arguments=arguments, distinct=distinct)


__all__ = [
    "AliasExpression",
    "ArgumentedExpression",
    "AssignmentExpression",
    "ClauseExpression",
    "ColumnListExpression",
    "ComposedExpression",
    "ConditionExpression",
    "ConditionalExpression",
    "Expression",
    "FromExpression",
    "FunctionExpression",
    "GroupExpression",
    "HavingExpression",
    "IdentifierExpression",
    "JoinExpression",
    "JoinSpecification",
    "ListExpression",
    "NaryOperatorExpression",
    "OrderExpression",
    "ParameterExpression",
    "ParenthesizedExpression",
    "RawExpression",
    "ReturningExpression",
    "SelectExpression",
    "SortExpression",
    "TableSourceExpression",
    "UnaryOperatorExpression",
    "ValueListExpression",
    "WhereExpression",
    "WithExpression",
    "col",
    "func",
    "param",
    "raw",
    "to_expression",
]
