"""VALUES rows of an INSERT statement."""

from __future__ import annotations
from typing import Any, Iterable, Optional, Sequence, Union

from pydantic import PrivateAttr

from ..errors import InvalidArgumentError
from ._bases import Expression, operand_to_sql
from .clause import ClauseExpression

Row = Union[dict[str, Any], tuple[Any, ...]]


class ValueListExpression(ClauseExpression):
    """Rows to insert, either mappings (column -> value) or positional tuples.

    Mapping rows are laid out in column order at render time, so the column
    list may be declared before or after the rows are added.
    """

    _rows: list[Row] = PrivateAttr(default_factory=list)

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    def append(self, row: Union[dict[str, Any], Sequence[Any]]) -> ValueListExpression:
        if isinstance(row, dict):
            self._rows.append(dict(row))
        elif isinstance(row, (list, tuple)):
            self._rows.append(tuple(row))
        else:
            raise InvalidArgumentError(f"A row must be a mapping or a sequence; got {row!r}")
        self._touch()
        return self

    def is_empty(self) -> bool:
        return not self._rows

    def inferred_columns(self) -> Optional[tuple[str, ...]]:
        """Columns of the first mapping row, or None when rows are positional."""
        for row in self._rows:
            if isinstance(row, dict):
                return tuple(row)
        return None

    def _children(self) -> Iterable[Expression]:
        for row in self._rows:
            items = row.values() if isinstance(row, dict) else row
            yield from (item for item in items if isinstance(item, Expression))

    def compose_for(self, columns: Optional[Sequence[str]]) -> tuple[str, tuple[Any, ...]]:
        """Render ``(?, ?), (?, ?)`` with mapping rows ordered by ``columns``."""
        rendered: list[str] = []
        values: tuple[Any, ...] = ()
        for index, row in enumerate(self._rows):
            if isinstance(row, dict):
                if columns is None:
                    raise InvalidArgumentError("Mapping rows require a column list")
                if set(row) != set(columns):
                    raise InvalidArgumentError(
                        f"Row {index} has columns {sorted(row)}, expected {sorted(columns)}"
                    )
                items = tuple(row[column] for column in columns)
            else:
                items = row
                if columns is not None and len(items) != len(columns):
                    raise InvalidArgumentError(
                        f"Row {index} has {len(items)} values, expected {len(columns)}"
                    )
            if not items:
                raise InvalidArgumentError(f"Row {index} is empty")
            rendered.append("(" + ", ".join(self._item_sql(item) for item in items) + ")")
            for item in items:
                values += item.values if isinstance(item, Expression) else (item,)
        return ", ".join(rendered), values

    @staticmethod
    def _item_sql(item: Any) -> str:
        return operand_to_sql(item) if isinstance(item, Expression) else "?"

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        return self.compose_for(self.inferred_columns())
