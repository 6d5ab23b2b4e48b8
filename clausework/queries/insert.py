"""INSERT statement."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Sequence, Union

from ..errors import ConfigurationError
from ..expressions import ColumnListExpression, Expression, ValueListExpression, to_expression
from .base import AbstractQuery, Section
from .mixins import _WithExecution, _WithReturning


class InsertQuery(_WithReturning, _WithExecution):
    """Represents the INSERT query.

    Rendering order: WITH, INSERT INTO target, (columns), then VALUES rows,
    a SELECT source, or DEFAULT VALUES when neither is given (a declared column
    list then requires rows or a source), then RETURNING.
    When no column list is declared, the keys of the first mapping row are used.
    """

    table_expression: Optional[Expression] = None
    column_list: Optional[ColumnListExpression] = None
    value_list: Optional[ValueListExpression] = None
    source_query: Optional[AbstractQuery] = None

    def into(self, table: Any) -> InsertQuery:
        self.table_expression = to_expression(table)
        return self

    def table(self, table: Any) -> InsertQuery:
        return self.into(table)

    def columns(self, *columns: Any) -> InsertQuery:
        if self.column_list is None:
            self.column_list = ColumnListExpression()
        for column in columns:
            self.column_list.append(column)
        self._invalidate()
        return self

    def row(self, row: Union[dict[str, Any], Sequence[Any]]) -> InsertQuery:
        """Add one row: a mapping (``{"name": "Bob"}``) or a sequence matching ``columns()``."""
        if self.value_list is None:
            self.value_list = ValueListExpression()
        self.value_list.append(row)
        self._invalidate()
        return self

    def rows(self, rows: Iterable[Union[dict[str, Any], Sequence[Any]]]) -> InsertQuery:
        """Add several rows at once."""
        for row in rows:
            self.row(row)
        return self

    def select(self, query: AbstractQuery) -> InsertQuery:
        """Insert the result of a SELECT instead of VALUES rows."""
        self.source_query = query
        return self

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield from super()._clauses()
        yield self.table_expression
        yield self.column_list
        yield self.value_list
        yield self.source_query

    def _check(self) -> None:
        super()._check()
        if self.table_expression is None:
            raise ConfigurationError("INSERT requires a target table")
        has_rows = self.value_list is not None and not self.value_list.is_empty()
        if has_rows and self.source_query is not None:
            raise ConfigurationError("INSERT cannot take both VALUES rows and a SELECT source")
        has_columns = self.column_list is not None and not self.column_list.is_empty()
        if has_columns and not has_rows and self.source_query is None:
            raise ConfigurationError("INSERT with a column list requires VALUES rows or a SELECT source")

    def _resolved_columns(self) -> Optional[tuple[str, ...]]:
        if self.column_list is not None and not self.column_list.is_empty():
            return self.column_list.names
        if self.value_list is not None:
            return self.value_list.inferred_columns()
        return None

    def _sections(self) -> Iterator[Section]:
        yield from self._with_section()
        yield f"INSERT INTO {self.table_expression.sql}", self.table_expression.values
        columns = self._resolved_columns()
        if columns:
            yield "(" + ", ".join(columns) + ")", ()
        if self.source_query is not None:
            sql, values = self.source_query.render()
            yield sql, tuple(values)
        elif self.value_list is not None and not self.value_list.is_empty():
            sql, values = self.value_list.compose_for(columns)
            yield f"VALUES {sql}", values
        else:
            yield "DEFAULT VALUES", ()
        yield from self._returning_section()
