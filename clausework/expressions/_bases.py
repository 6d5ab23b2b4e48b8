"""Base expression types for SQL expression trees."""

from __future__ import annotations
import itertools
from typing import Any, ClassVar, Iterable, Tuple

from pydantic import BaseModel, Field as PydanticField

# shared by every node, so a mutation anywhere outranks any earlier build
_revisions = itertools.count(1)


def operand_to_sql(operand: Any) -> str:
    """Render one operand as SQL: expression's ``sql``, ``(?, ...)`` for sequences, ``?`` for literals."""
    if isinstance(operand, Expression):
        if operand.SUBQUERY:
            return f"({operand.sql})"
        return operand.sql
    if isinstance(operand, (list, tuple)):
        return "(" + ", ".join(map(operand_to_sql, operand)) + ")"
    return "?"


def operand_to_values(operand: Any) -> tuple[Any, ...]:
    """Collect values for one operand: recurse into expressions and sequences, else ``(operand,)``."""
    if isinstance(operand, Expression):
        return operand.values
    if isinstance(operand, (list, tuple)):
        return sum(map(operand_to_values, operand), ())
    return (operand,)


def operand_children(operand: Any) -> Iterable[Expression]:
    """Yield the expressions nested in an operand (itself, or the members of a sequence)."""
    if isinstance(operand, Expression):
        yield operand
    elif isinstance(operand, (list, tuple)):
        for item in operand:
            yield from operand_children(item)


class Expression(BaseModel):
    """Base type for all SQL expression nodes.

    Subclasses must implement the ``sql`` property. The default ``values``
    is an empty tuple; expression types that contain literals override it
    to return the bound values in the same order as ``?`` placeholders in ``sql``.
    """

    model_config = {"arbitrary_types_allowed": True}

    SUBQUERY: ClassVar[bool] = False
    """True for complete statements, which are parenthesised when nested."""

    _revision: int = 0

    @property
    def sql(self) -> str:
        """SQL fragment for this expression, with ``?`` for bound parameters."""
        raise NotImplementedError("Subclasses must implement `sql` property")

    @property
    def values(self) -> tuple[Any, ...]:
        """Bound values for placeholders in ``sql``, in order."""
        return ()

    def render(self) -> tuple[str, list[Any]]:
        """Return ``(sql, params)`` with params as a list."""
        return self.sql, list(self.values)

    @property
    def revision(self) -> int:
        """Latest mutation stamp in this node's subtree; grows on every change."""
        return max([self._revision, *(child.revision for child in self._children())])

    def _children(self) -> Iterable[Expression]:
        return ()

    def _touch(self) -> None:
        self._revision = next(_revisions)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if not name.startswith("_"):
            self._touch()

    def in_(self, other: Any):
        """Build an IN expression (e.g. ``col("id").in_([1, 2, 3])``)."""
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="IN", arguments=(self, other))

    def not_in(self, other: Any):
        """Build a NOT IN expression."""
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="NOT IN", arguments=(self, other))

    def is_null(self):
        """Build an IS NULL expression."""
        from .operators import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="IS NULL", arguments=(self,), postfix=True)

    def is_not_null(self):
        """Build an IS NOT NULL expression."""
        from .operators import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="IS NOT NULL", arguments=(self,), postfix=True)

    def between(self, low: Any, high: Any):
        """Inclusive range: (expr >= low) & (expr <= high)."""
        return (self >= low) & (self <= high)

    def like(self, pattern: str):
        """Build a LIKE expression (the pattern is bound as-is)."""
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="LIKE", arguments=(self, pattern))

    def as_(self, alias: str):
        """Alias this expression for a select or returning list (``expr AS alias``)."""
        from .alias import AliasExpression
        return AliasExpression(expression=self, alias=alias)

    def asc(self):
        """Sort ascending by this expression (for ``order_by(...)``)."""
        from .order import SortExpression
        return SortExpression(expression=self, direction="ASC")

    def desc(self):
        """Sort descending by this expression (for ``order_by(...)``)."""
        from .order import SortExpression
        return SortExpression(expression=self, direction="DESC")

    def __invert__(self):
        """Build a NOT expression."""
        from .operators import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="NOT", arguments=(self,))

    def __and__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="AND", arguments=(self, other))

    def __or__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="OR", arguments=(self, other))

    def __add__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="+", arguments=(self, other))

    def __sub__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="-", arguments=(self, other))

    def __neg__(self):
        from .operators import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="-", arguments=(self,))

    def __mul__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="*", arguments=(self, other))

    def __truediv__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="/", arguments=(self, other))

    def __mod__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="%", arguments=(self, other))

    def __eq__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="=", arguments=(self, other))

    def __ne__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="!=", arguments=(self, other))

    def __lt__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="<", arguments=(self, other))

    def __le__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol="<=", arguments=(self, other))

    def __gt__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol=">", arguments=(self, other))

    def __ge__(self, other: Any):
        from .operators import NaryOperatorExpression
        return NaryOperatorExpression(symbol=">=", arguments=(self, other))

    def lower(self):
        """Build a LOWER function call."""
        from .operators import FunctionExpression
        return FunctionExpression(symbol="LOWER", arguments=(self,))

    def upper(self):
        """Build an UPPER function call."""
        from .operators import FunctionExpression
        return FunctionExpression(symbol="UPPER", arguments=(self,))

    def trim(self):
        """Build a TRIM function call."""
        from .operators import FunctionExpression
        return FunctionExpression(symbol="TRIM", arguments=(self,))


class ComposedExpression(Expression):
    """Expression whose SQL text and values are produced together by ``_compose``.

    Keeps ``sql`` and ``values`` in sync for nodes whose placeholder layout
    depends on their content (conditions, clauses, whole statements).
    """

    def _compose(self) -> tuple[str, tuple[Any, ...]]:
        raise NotImplementedError("Subclasses must implement `_compose`")

    @property
    def sql(self) -> str:
        return self._compose()[0]

    @property
    def values(self) -> tuple[Any, ...]:
        return self._compose()[1]

    def render(self) -> tuple[str, list[Any]]:
        sql, values = self._compose()
        return sql, list(values)


class ArgumentedExpression(Expression):
    """Base for expressions that have a symbol and a tuple of arguments.

    Used by function calls (e.g. ``LOWER(x)``) and operators (e.g. ``=``, ``AND``).
    ``values`` is the concatenation of literal argument values; nested expressions
    are recursed into.
    """

    symbol: str
    arguments: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    @staticmethod
    def _argument_to_sql(argument: Any) -> str:
        return operand_to_sql(argument)

    @staticmethod
    def _argument_to_values(argument: Any) -> tuple[Any, ...]:
        return operand_to_values(argument)

    @property
    def values(self) -> tuple[Any, ...]:
        """All literal values from arguments, in order (recursing into nested expressions)."""
        return sum(map(self._argument_to_values, self.arguments), ())

    def _children(self) -> Iterable[Expression]:
        for argument in self.arguments:
            yield from operand_children(argument)
