"""Clause mixins shared by the statement types (FROM, JOIN, WHERE, ORDER BY, LIMIT, RETURNING)."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ..expressions import (
    Expression,
    FromExpression,
    JoinExpression,
    OrderExpression,
    ReturningExpression,
    WhereExpression,
)
from .base import AbstractQuery, Section, check_non_negative


class _WithFrom(AbstractQuery):
    """Mixin that adds table sources (FROM, or the UPDATE/DELETE target)."""

    from_expression: Optional[FromExpression] = None

    def from_(self, table: Any, alias: Optional[str] = None):
        """Add a table source: a name (``"users"``, ``"users u"``), an expression, or a subquery."""
        if self.from_expression is None:
            self.from_expression = FromExpression()
        self.from_expression.append(table, alias)
        self._invalidate()
        return self

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.from_expression

    def _has_target(self) -> bool:
        return self.from_expression is not None and not self.from_expression.is_empty()


class _WithJoin(AbstractQuery):
    """Mixin that adds JOIN clauses, rendered in call order."""

    join_expression: Optional[JoinExpression] = None

    def _join(self, join_type: str, table: Any, condition: Any = None, alias: Optional[str] = None):
        if self.join_expression is None:
            self.join_expression = JoinExpression()
        self.join_expression.append(join_type, table, condition, alias)
        self._invalidate()
        return self

    def join(self, table: Any, condition: Any = None, alias: Optional[str] = None):
        """Add an inner join.

        Examples:
            join("orders o", "o.user_id = u.id")
            join("orders", ["user_id"])                       # USING (user_id)
            join("orders o", lambda c: c.where("o.user_id", "=", col("u.id")))
        """
        return self._join("JOIN", table, condition, alias)

    def inner_join(self, table: Any, condition: Any = None, alias: Optional[str] = None):
        return self._join("INNER JOIN", table, condition, alias)

    def left_join(self, table: Any, condition: Any = None, alias: Optional[str] = None):
        return self._join("LEFT JOIN", table, condition, alias)

    def right_join(self, table: Any, condition: Any = None, alias: Optional[str] = None):
        return self._join("RIGHT JOIN", table, condition, alias)

    def full_join(self, table: Any, condition: Any = None, alias: Optional[str] = None):
        return self._join("FULL JOIN", table, condition, alias)

    def cross_join(self, table: Any, alias: Optional[str] = None):
        return self._join("CROSS JOIN", table, None, alias)

    def natural_join(self, table: Any, alias: Optional[str] = None):
        return self._join("NATURAL JOIN", table, None, alias)

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.join_expression

    def _join_section(self) -> Iterator[Section]:
        yield from self._clause_section("", self.join_expression)


class _WithWhere(AbstractQuery):
    """Mixin that adds a WHERE clause; see ConditionalExpression.where for accepted forms."""

    where_expression: Optional[WhereExpression] = None

    def _where(self) -> WhereExpression:
        if self.where_expression is None:
            self.where_expression = WhereExpression()
        self._invalidate()
        return self.where_expression

    def where(self, column: Any, operator: Optional[str] = None, value: Any = None):
        """Apply a condition, ANDed with any existing ones.

        Examples:
            where("id", "=", 5)
            where("status", "IN", ["new", "open"])
            where(lambda c: c.where("a", "=", 1).or_where("b", "=", 2))
            where(col("age") >= 18)
        """
        self._where().where(column, operator, value)
        return self

    def and_where(self, column: Any, operator: Optional[str] = None, value: Any = None):
        self._where().and_where(column, operator, value)
        return self

    def or_where(self, column: Any, operator: Optional[str] = None, value: Any = None):
        self._where().or_where(column, operator, value)
        return self

    def where_exists(self, query: Expression):
        self._where().where_exists(query)
        return self

    def where_not_exists(self, query: Expression):
        self._where().where_not_exists(query)
        return self

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.where_expression

    def _where_section(self) -> Iterator[Section]:
        yield from self._clause_section("WHERE", self.where_expression)


class _WithOrder(AbstractQuery):
    """Mixin that adds ORDER BY."""

    order_expression: Optional[OrderExpression] = None

    def order_by(self, column: Any, direction: str = "ASC"):
        """Sort by a column or expression. Accepts ``col("x").desc()`` and ``{"name": "DESC"}`` as well."""
        if self.order_expression is None:
            self.order_expression = OrderExpression()
        self.order_expression.append(column, direction)
        self._invalidate()
        return self

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.order_expression

    def _order_section(self) -> Iterator[Section]:
        yield from self._clause_section("ORDER BY", self.order_expression)


class _WithLimit(AbstractQuery):
    """Mixin that adds LIMIT (rendered inline, validated at build time)."""

    limit_value: Optional[Any] = None
    """Optional LIMIT (stored to avoid shadowing the limit() method)."""

    def limit(self, limit: Optional[int]):
        """Set LIMIT to the given integer, or remove it with None."""
        self.limit_value = limit
        return self

    def _check(self) -> None:
        super()._check()
        check_non_negative("LIMIT", self.limit_value)

    def _limit_section(self) -> Iterator[Section]:
        if self.limit_value is not None:
            yield f"LIMIT {self.limit_value}", ()


class _WithOffset(AbstractQuery):
    """Mixin that adds OFFSET."""

    offset_value: Optional[Any] = None
    """Optional OFFSET (stored to avoid shadowing the offset() method)."""

    def offset(self, offset: Optional[int]):
        """Set OFFSET to the given integer, or remove it with None."""
        self.offset_value = offset
        return self

    def _check(self) -> None:
        super()._check()
        check_non_negative("OFFSET", self.offset_value)

    def _offset_section(self) -> Iterator[Section]:
        if self.offset_value is not None:
            yield f"OFFSET {self.offset_value}", ()


class _WithReturning(AbstractQuery):
    """Mixin that adds RETURNING."""

    returning_expression: Optional[ReturningExpression] = None

    def returning(self, *columns: Any, **aliased: Any):
        """Return columns from the affected rows (``returning("id")``, ``returning(total="a + b")``)."""
        if self.returning_expression is None:
            self.returning_expression = ReturningExpression()
        for column in columns:
            self.returning_expression.append(column)
        for alias, column in aliased.items():
            self.returning_expression.append(column, alias)
        self._invalidate()
        return self

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.returning_expression

    def _returning_section(self) -> Iterator[Section]:
        yield from self._clause_section("RETURNING", self.returning_expression)


class _WithExecution(AbstractQuery):
    """Mixin for data-modifying statements: ``exec()`` returns the affected row count."""

    def exec(self) -> int:
        """Run the statement through ``executor.execute`` and return its result."""
        executor = self._require_executor()
        sql, params = self.render()
        return executor.execute(sql, params)
