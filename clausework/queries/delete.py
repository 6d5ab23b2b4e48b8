"""DELETE statement."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ..errors import ConfigurationError
from .base import Section
from .mixins import _WithExecution, _WithFrom, _WithJoin, _WithLimit, _WithOrder, _WithReturning, _WithWhere


class DeleteQuery(_WithFrom, _WithJoin, _WithWhere, _WithOrder, _WithLimit, _WithReturning, _WithExecution):
    """Represents the DELETE query.

    Rendering order: WITH, DELETE FROM target, JOIN, WHERE, ORDER BY, LIMIT,
    RETURNING.
    """

    def table(self, table: Any, alias: Optional[str] = None) -> DeleteQuery:
        return self.from_(table, alias)

    def _check(self) -> None:
        super()._check()
        if not self._has_target():
            raise ConfigurationError("DELETE requires a target table")

    def _sections(self) -> Iterator[Section]:
        yield from self._with_section()
        yield from self._clause_section("DELETE FROM", self.from_expression)
        yield from self._join_section()
        yield from self._where_section()
        yield from self._order_section()
        yield from self._limit_section()
        yield from self._returning_section()
