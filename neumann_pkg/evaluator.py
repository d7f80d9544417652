"""Expression evaluator facade.

    >>> from neumann_pkg.evaluator import Neumann
    >>> Neumann.input("1+2*1*2/2").evaluate()
    '3'

Subclasses can override ``evaluate_constant``, ``evaluate_operator`` and
``evaluate_function`` to change how individual symbols are computed; the
engine calls back into the evaluator for every value it needs.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from .arithmetic import Arithmetic
from .engine import ShuntingYard
from .registry import Constant, Function, Operator


class Neumann:
    """Evaluates one arithmetic expression to a decimal string."""

    def __init__(self, expression: str, backend: Arithmetic | None = None):
        self.expression = expression
        self.backend = Arithmetic() if backend is None else backend

    @classmethod
    def input(cls, expression: str, precision: int | None = None) -> "Neumann":
        return cls(expression, Arithmetic(precision=precision))

    def __repr__(self) -> str:
        return f"Neumann({self.expression!r})"

    def parse_number(self, text: str) -> Decimal:
        return self.backend.parse_number(text)

    def evaluate_constant(self, constant: Constant) -> Decimal:
        return self.backend.evaluate_constant(constant)

    def evaluate_operator(self, operator: Operator, operands: Sequence[Decimal]) -> Decimal:
        return self.backend.evaluate_operator(operator, operands)

    def evaluate_function(self, function: Function, arguments: Sequence[Decimal]) -> Decimal:
        return self.backend.evaluate_function(function, arguments)

    def evaluate_decimal(self) -> Decimal:
        return ShuntingYard(self).evaluate(self.expression)

    def evaluate(self) -> str:
        """Evaluate the expression and render the result as a string."""
        return str(self.evaluate_decimal())
