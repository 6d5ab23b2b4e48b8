"""Base statement type: build cache, rendering, execution through an executor."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, Iterator, Optional

from pydantic import Field

from ..errors import ConfigurationError, InvalidArgumentError
from ..expressions import ComposedExpression, Expression, WithExpression

logger = logging.getLogger("clausework")

Section = tuple[str, tuple[Any, ...]]


class AbstractQuery(ComposedExpression):
    """A complete statement composed from clause expressions.

    Clauses are rendered in a fixed per-statement order by ``_sections()``.
    The rendered ``(sql, params)`` pair is cached; the cache is dropped when a
    fluent method runs, when a public field is assigned, and when any clause
    the query owns (or any nested subquery) has been mutated since the last
    build, so ``to_sql()`` never returns SQL for stale clause state.

    Validation is deferred: mutating calls only record state, and problems
    (missing target table, negative LIMIT, unknown operator, ...) surface from
    ``build()`` before any SQL is produced.
    """

    SUBQUERY: ClassVar[bool] = True

    executor: Optional[Any] = Field(default=None, exclude=True)
    """Object with ``execute(sql, params)`` and ``query(sql, params)`` (see QueryExecutor)."""
    with_expression: Optional[WithExpression] = None
    """Common table expressions rendered before the statement keyword."""

    _built: bool = False
    _built_revision: int = -1
    _sql: str = ""
    _params: tuple[Any, ...] = ()

    def _invalidate(self) -> None:
        self._touch()
        self._built = False

    # --- WITH ---

    def with_(self, name: str, query: Expression, recursive: bool = False) -> AbstractQuery:
        """Add a common table expression (``WITH name AS (query)``)."""
        if self.with_expression is None:
            self.with_expression = WithExpression()
        self.with_expression.append(name, query, recursive=recursive)
        self._invalidate()
        return self

    def with_recursive(self, name: str, query: Expression) -> AbstractQuery:
        """Add a recursive common table expression."""
        return self.with_(name, query, recursive=True)

    # --- building ---

    @property
    def built(self) -> bool:
        """True when the cached SQL reflects the current clause state."""
        return self._built and self._built_revision == self.revision

    def _clauses(self) -> Iterator[Optional[Expression]]:
        yield self.with_expression

    def _children(self) -> Iterable[Expression]:
        return (clause for clause in self._clauses() if clause is not None)

    def _check(self) -> None:
        """Raise if the statement cannot be rendered; extended by subclasses and mixins."""

    def _sections(self) -> Iterator[Section]:
        raise NotImplementedError("Subclasses must implement `_sections`")

    @staticmethod
    def _clause_section(keyword: str, clause: Optional[Expression]) -> Iterator[Section]:
        """Yield ``keyword clause`` unless the clause is missing or renders empty."""
        if clause is None:
            return
        sql, values = clause.render()
        if sql:
            yield f"{keyword} {sql}" if keyword else sql, tuple(values)

    def _with_section(self) -> Iterator[Section]:
        yield from self._clause_section("WITH", self.with_expression)

    def build(self) -> AbstractQuery:
        """Render the statement unless the cached rendering is still current."""
        if self.built:
            return self
        self._check()
        parts: list[str] = []
        params: tuple[Any, ...] = ()
        for sql, values in self._sections():
            parts.append(sql)
            params += values
        self._sql = " ".join(parts)
        self._params = params
        self._built = True
        self._built_revision = self.revision
        logger.debug("Built %s: %s", type(self).__name__, self._sql)
        return self

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        self.build()
        return self._sql, self._params

    def to_sql(self) -> str:
        """Return the SQL string, building first if needed."""
        return self.build()._sql

    def get_params(self) -> list[Any]:
        """Return the bound parameters in placeholder order, building first if needed."""
        return list(self.build()._params)

    def __str__(self) -> str:
        return self.to_sql()

    # --- execution ---

    def _require_executor(self) -> Any:
        if self.executor is None:
            raise ConfigurationError(f"{type(self).__name__} has no query executor attached")
        return self.executor

    def fetch(self) -> list[Any]:
        """Run the statement through ``executor.query`` and return its rows."""
        executor = self._require_executor()
        sql, params = self.render()
        return executor.query(sql, params)

    def first(self) -> Optional[Any]:
        """Return the first row, or None if there are no results."""
        rows = self.fetch()
        return rows[0] if rows else None

    def scalar(self) -> Optional[Any]:
        """Return the first column of the first row, or None if there are no results."""
        row = self.first()
        if row is None:
            return None
        if isinstance(row, dict):
            return next(iter(row.values()), None)
        return row[0]


def check_non_negative(name: str, value: Any) -> None:
    """Raise InvalidArgumentError unless value is None or a non-negative integer."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer; got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must not be negative; got {value}")
