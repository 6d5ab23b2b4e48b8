"""SELECT statement."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ..errors import InvalidArgumentError
from ..expressions import Expression, GroupExpression, HavingExpression, SelectExpression
from .base import Section
from .mixins import _WithFrom, _WithJoin, _WithLimit, _WithOffset, _WithOrder, _WithWhere


class SelectQuery(_WithFrom, _WithJoin, _WithWhere, _WithOrder, _WithLimit, _WithOffset):
    """Represents the SELECT query.

    Rendering order: WITH, SELECT [DISTINCT] list (``*`` when empty), FROM,
    JOIN, WHERE, GROUP BY, HAVING, ORDER BY, LIMIT, OFFSET.
    """

    select_expression: Optional[SelectExpression] = None
    group_expression: Optional[GroupExpression] = None
    having_expression: Optional[HavingExpression] = None
    distinct_value: bool = False

    def select(self, *columns: Any, **aliased: Any) -> SelectQuery:
        """Add select items: names, expressions, subqueries; keyword arguments are aliased (``n="count(*)"``)."""
        if self.select_expression is None:
            self.select_expression = SelectExpression()
        for column in columns:
            self.select_expression.append(column)
        for alias, column in aliased.items():
            self.select_expression.append(column, alias)
        self._invalidate()
        return self

    def distinct(self, distinct: bool = True) -> SelectQuery:
        self.distinct_value = distinct
        return self

    def group_by(self, *columns: Any) -> SelectQuery:
        if self.group_expression is None:
            self.group_expression = GroupExpression()
        for column in columns:
            self.group_expression.append(column)
        self._invalidate()
        return self

    def _having(self) -> HavingExpression:
        if self.having_expression is None:
            self.having_expression = HavingExpression()
        self._invalidate()
        return self.having_expression

    def having(self, column: Any, operator: Optional[str] = None, value: Any = None) -> SelectQuery:
        self._having().where(column, operator, value)
        return self

    def and_having(self, column: Any, operator: Optional[str] = None, value: Any = None) -> SelectQuery:
        self._having().and_where(column, operator, value)
        return self

    def or_having(self, column: Any, operator: Optional[str] = None, value: Any = None) -> SelectQuery:
        self._having().or_where(column, operator, value)
        return self

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.select_expression
        yield self.group_expression
        yield self.having_expression

    def _check(self) -> None:
        super()._check()
        if self.offset_value is not None and self.limit_value is None:
            raise InvalidArgumentError("OFFSET requires a LIMIT")

    def _sections(self) -> Iterator[Section]:
        yield from self._with_section()
        yield from self._select_section()
        yield from self._clause_section("FROM", self.from_expression)
        yield from self._join_section()
        yield from self._where_section()
        yield from self._clause_section("GROUP BY", self.group_expression)
        yield from self._clause_section("HAVING", self.having_expression)
        yield from self._order_section()
        yield from self._limit_section()
        yield from self._offset_section()

    def _select_section(self) -> Iterator[Section]:
        keyword = "SELECT DISTINCT" if self.distinct_value else "SELECT"
        sections = list(self._clause_section(keyword, self.select_expression))
        if sections:
            yield from sections
        else:
            yield f"{keyword} *", ()
