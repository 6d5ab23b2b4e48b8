"""UPDATE statement."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ..errors import ConfigurationError
from ..expressions import AssignmentExpression, Expression
from .base import Section
from .mixins import _WithExecution, _WithFrom, _WithJoin, _WithLimit, _WithOrder, _WithReturning, _WithWhere


class UpdateQuery(_WithFrom, _WithJoin, _WithWhere, _WithOrder, _WithLimit, _WithReturning, _WithExecution):
    """Represents the UPDATE query.

    Rendering order: WITH, UPDATE target, JOIN, SET, WHERE, ORDER BY, LIMIT,
    RETURNING.

    Example:
        UpdateQuery().table("users").assign("name", "Bob").where("id", "=", 5)
        # UPDATE users SET name = ? WHERE id = ?    ["Bob", 5]
    """

    assignment_expression: Optional[AssignmentExpression] = None

    def table(self, table: Any, alias: Optional[str] = None) -> UpdateQuery:
        return self.from_(table, alias)

    def assign(self, column: Any, value: Any = None) -> UpdateQuery:
        """Set a column (``assign("name", "Bob")``) or several (``assign({"a": 1, "b": 2})``).

        Assigning the same column again replaces its value in place.
        """
        if self.assignment_expression is None:
            self.assignment_expression = AssignmentExpression()
        self.assignment_expression.append(column, value)
        self._invalidate()
        return self

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.assignment_expression

    def _check(self) -> None:
        super()._check()
        if not self._has_target():
            raise ConfigurationError("UPDATE requires a target table")
        if self.assignment_expression is None or self.assignment_expression.is_empty():
            raise ConfigurationError("UPDATE requires at least one assignment")

    def _sections(self) -> Iterator[Section]:
        yield from self._with_section()
        yield from self._clause_section("UPDATE", self.from_expression)
        yield from self._join_section()
        yield from self._clause_section("SET", self.assignment_expression)
        yield from self._where_section()
        yield from self._order_section()
        yield from self._limit_section()
        yield from self._returning_section()
