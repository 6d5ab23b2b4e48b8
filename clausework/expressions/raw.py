"""Raw SQL and single bound parameter expressions."""

from typing import Any, Tuple

from pydantic import Field as PydanticField

from ..errors import InvalidArgumentError
from ._bases import Expression


class RawExpression(Expression):
    """Verbatim SQL text with its own bound values (e.g. ``counter + ?``)."""

    text: str
    parameters: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    @property
    def sql(self) -> str:
        if not self.text.strip():
            raise InvalidArgumentError("Raw SQL must not be empty")
        return self.text

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self.parameters)


class ParameterExpression(Expression):
    """One bound value, rendered as ``?``."""

    value: Any = None

    @property
    def sql(self) -> str:
        return "?"

    @property
    def values(self) -> tuple[Any, ...]:
        return (self.value,)
