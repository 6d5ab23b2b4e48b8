"""SET list of an UPDATE statement."""

from __future__ import annotations
from typing import Any, Iterable

from pydantic import PrivateAttr

from ..errors import InvalidArgumentError
from ._bases import Expression, operand_to_sql
from .clause import ClauseExpression


class AssignmentExpression(ClauseExpression):
    """Ordered ``column = value`` pairs.

    Assigning a column twice replaces the value but keeps the column at the
    position of its first assignment. Expression values render inline
    (``raw("counter + 1")``), statements as parenthesised subqueries, and
    everything else, lists included, is bound as a single parameter.
    """

    _assignments: dict[str, Any] = PrivateAttr(default_factory=dict)

    @property
    def assignments(self) -> dict[str, Any]:
        return dict(self._assignments)

    def append(self, column: Any, value: Any = None) -> AssignmentExpression:
        if isinstance(column, dict):
            for name, item in column.items():
                self._assignments[name] = item
        elif isinstance(column, str):
            self._assignments[column] = value
        else:
            raise InvalidArgumentError(f"Assigned column must be a name; got {column!r}")
        self._touch()
        return self

    def is_empty(self) -> bool:
        return not self._assignments

    def _children(self) -> Iterable[Expression]:
        return (value for value in self._assignments.values() if isinstance(value, Expression))

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        parts: list[str] = []
        values: tuple[Any, ...] = ()
        for column, value in self._assignments.items():
            if not isinstance(column, str) or not column.strip():
                raise InvalidArgumentError(f"Assigned column must be a non-empty name; got {column!r}")
            if isinstance(value, Expression):
                parts.append(f"{column} = {operand_to_sql(value)}")
                values += value.values
            else:
                parts.append(f"{column} = ?")
                values += (value,)
        return ", ".join(parts), values
