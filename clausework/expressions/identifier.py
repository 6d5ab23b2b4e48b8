"""Identifier expression: a column or table name rendered verbatim."""

from typing import Optional

from ..errors import InvalidArgumentError
from ._bases import Expression


class IdentifierExpression(Expression):
    """Reference to a column or table (e.g. ``id``, ``u.name``, ``users``).

    Has no placeholders, so ``values`` is ``()``. The name is not quoted.
    """

    name: Optional[str] = None

    @property
    def sql(self) -> str:
        if self.name is None or not str(self.name).strip():
            raise InvalidArgumentError("Identifier must not be empty")
        return self.name


def to_expression(item) -> Expression:
    """Coerce a builder argument to an expression.

    Strings (and None) become identifiers, rendered verbatim, so ``"users u"``
    or ``"count(*) AS n"`` work as written; expressions pass through.
    An empty name is only reported when the statement is built.
    """
    if isinstance(item, Expression):
        return item
    if item is None or isinstance(item, str):
        return IdentifierExpression(name=item)
    raise InvalidArgumentError(f"Expected a name or an expression; got {type(item).__name__}")
