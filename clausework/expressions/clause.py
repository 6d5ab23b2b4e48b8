"""Base types for clause builders (WHERE, JOIN, ORDER BY, ...)."""

from __future__ import annotations
from typing import Any, ClassVar, Iterable

from pydantic import PrivateAttr

from ._bases import ComposedExpression, Expression, operand_to_sql


class ClauseExpression(ComposedExpression):
    """One logical section of a statement, accumulated through append-style methods.

    A clause holding no parts renders as the empty string and contributes no
    values; the owning query then omits the clause keyword as well. Every
    mutation bumps the revision counter so queries know to rebuild.
    """

    def is_empty(self) -> bool:
        raise NotImplementedError("Subclasses must implement `is_empty`")


class ListExpression(ClauseExpression):
    """Clause made of an ordered list of expressions joined by ``SEPARATOR``."""

    SEPARATOR: ClassVar[str] = ", "

    _items: list[Expression] = PrivateAttr(default_factory=list)

    @property
    def items(self) -> tuple[Expression, ...]:
        return tuple(self._items)

    def append(self, item: Expression) -> ListExpression:
        self._items.append(item)
        self._touch()
        return self

    def is_empty(self) -> bool:
        return not self._items

    def _children(self) -> Iterable[Expression]:
        return iter(self._items)

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        sql = self.SEPARATOR.join(operand_to_sql(item) for item in self._items)
        values = sum((item.values for item in self._items), ())
        return sql, values
