"""Operator and function call expressions: a symbol applied to arguments."""

import re

from ..errors import InvalidArgumentError
from ._bases import ArgumentedExpression

FUNCTION_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


class NaryOperatorExpression(ArgumentedExpression):
    """Infix operator over its operands, parenthesised: ``(a = ?)``, ``(x AND y AND z)``."""

    @property
    def sql(self) -> str:
        if not self.symbol:
            raise InvalidArgumentError("Operator symbol must not be empty")
        if not self.arguments:
            raise InvalidArgumentError(f"Operator {self.symbol} needs at least one operand")
        separator = f" {self.symbol} "
        return "(" + separator.join(self._argument_to_sql(argument) for argument in self.arguments) + ")"


class UnaryOperatorExpression(ArgumentedExpression):
    """Operator with one operand, prefix (``NOT x``, ``EXISTS (...)``) or postfix (``x IS NULL``)."""

    postfix: bool = False

    @property
    def sql(self) -> str:
        if len(self.arguments) != 1:
            raise InvalidArgumentError(f"{self.symbol} takes exactly one operand; got {len(self.arguments)}")
        operand = self._argument_to_sql(self.arguments[0])
        return f"{operand} {self.symbol}" if self.postfix else f"{self.symbol} {operand}"


class FunctionExpression(ArgumentedExpression):
    """Function call ``NAME(args)``; with ``distinct`` set, aggregates render as ``COUNT(DISTINCT x)``."""

    distinct: bool = False

    @property
    def sql(self) -> str:
        if not self.symbol or not FUNCTION_NAME.match(self.symbol):
            raise InvalidArgumentError(f"Invalid function name: {self.symbol!r}")
        arguments = ", ".join(self._argument_to_sql(argument) for argument in self.arguments)
        if self.distinct:
            arguments = f"DISTINCT {arguments}"
        return f"{self.symbol}({arguments})"
