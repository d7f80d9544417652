"""Arbitrary-precision arithmetic backend.

Values are ``decimal.Decimal``. Addition, subtraction, multiplication,
negation and remainder are exact; everything else is rounded to the
configured number of significant digits. Trigonometric and hyperbolic
functions and the constants pi and e are evaluated with SymPy ``evalf``.

Operations go through the backend's own ``decimal.Context`` objects rather
than the thread's current context; apart from their sticky status flags those
are never modified, so one backend can be shared between threads.
"""

from __future__ import annotations

import decimal
import re
from collections.abc import Sequence
from contextlib import contextmanager
from decimal import Decimal
from functools import lru_cache

import sympy as sp

from . import config
from .logging_config import get_logger
from .registry import (
    Arity,
    Constant,
    Function,
    Operator,
    function_descriptor,
    operator_descriptor,
)
from .types import (
    ArgumentCountError,
    DivisionByZeroError,
    DomainError,
    EmptyArgumentListError,
    NumberFormatError,
)

logger = get_logger("arithmetic")

# Extra digits requested from SymPy before rounding to the working precision
GUARD_DIGITS = 5

_ONE = Decimal(1)
_NUMBER_RE = re.compile(r"^(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
_TRAPS = [
    decimal.InvalidOperation,
    decimal.DivisionByZero,
    decimal.Overflow,
    decimal.Underflow,
]

_SYMPY_CONSTANTS = {
    Constant.PI: sp.pi,
    Constant.E: sp.E,
}

_SYMPY_FUNCTIONS = {
    Function.SINE: sp.sin,
    Function.COSINE: sp.cos,
    Function.TANGENT: sp.tan,
    Function.ARC_SINE: sp.asin,
    Function.ARC_COSINE: sp.acos,
    Function.ARC_TANGENT: sp.atan,
    Function.HYPERBOLIC_SINE: sp.sinh,
    Function.HYPERBOLIC_COSINE: sp.cosh,
    Function.HYPERBOLIC_TANGENT: sp.tanh,
}


@lru_cache(maxsize=64)
def _constant_digits(constant: Constant, digits: int) -> str:
    logger.debug("Computing %s to %d digits", constant.value, digits)
    return str(_SYMPY_CONSTANTS[constant].evalf(digits))


class Arithmetic:
    """Numeric backend evaluating constants, operators and functions."""

    def __init__(self, precision: int | None = None, rounding: str | None = None):
        self.precision = config.PRECISION if precision is None else precision
        self.rounding = config.ROUNDING if rounding is None else rounding
        if self.precision < 1:
            raise ValueError(f"precision must be positive, got {self.precision}")
        if self.rounding not in config.ROUNDING_MODES:
            raise ValueError(f"unknown rounding mode: {self.rounding}")
        self.context = decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            traps=_TRAPS,
        )
        self._exact = decimal.Context(
            prec=decimal.MAX_PREC,
            rounding=self.rounding,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            traps=_TRAPS,
        )

    def __repr__(self) -> str:
        return f"Arithmetic(precision={self.precision}, rounding={self.rounding!r})"

    # Literals and constants

    def parse_number(self, text: str) -> Decimal:
        """Parse an unsigned decimal literal exactly."""
        if not _NUMBER_RE.match(text):
            raise NumberFormatError(f"Invalid number: {text!r}", token=text)
        return Decimal(text)

    def evaluate_constant(self, constant: Constant) -> Decimal:
        digits = _constant_digits(constant, self.precision + GUARD_DIGITS)
        return self.context.plus(Decimal(digits))

    # Operators

    def evaluate_operator(self, operator: Operator, operands: Sequence[Decimal]) -> Decimal:
        descriptor = operator_descriptor(operator)
        expected = 1 if descriptor.arity is Arity.UNARY else 2
        if len(operands) != expected:
            raise ArgumentCountError(
                f"Operator '{descriptor.symbol}' takes {expected} operand(s), got {len(operands)}",
                token=descriptor.symbol,
            )

        with self._signals(descriptor.symbol):
            if operator is Operator.NEGATE:
                return self._finite(self._exact.minus(operands[0]))
            left, right = operands
            if operator is Operator.PLUS:
                return self._finite(self._exact.add(left, right))
            if operator is Operator.MINUS:
                return self._finite(self._exact.subtract(left, right))
            if operator is Operator.MULTIPLY:
                return self._finite(self._exact.multiply(left, right))
            if operator is Operator.DIVIDE:
                self._check_divisor(right, descriptor.symbol)
                return self._finite(self.context.divide(left, right))
            if operator is Operator.MODULO:
                self._check_divisor(right, descriptor.symbol)
                return self._finite(self._exact.remainder(left, right))
            if operator is Operator.EXPONENT:
                return self._power(left, right)
        raise ValueError(f"Unhandled operator: {operator}")

    def _power(self, base: Decimal, exponent: Decimal) -> Decimal:
        if exponent.is_zero():
            return _ONE
        if base.is_zero() and exponent < 0:
            raise DivisionByZeroError("Zero raised to a negative power", token="^")
        if base < 0 and exponent != exponent.to_integral_value():
            raise DomainError(
                f"Negative base {base} with fractional exponent {exponent}", token="^"
            )
        return self._finite(self.context.power(base, exponent))

    # Functions

    def evaluate_function(self, function: Function, arguments: Sequence[Decimal]) -> Decimal:
        name = function.value
        self.check_arguments(function, arguments)

        with self._signals(name):
            if function is Function.MIN:
                return min(arguments)
            if function is Function.MAX:
                return max(arguments)
            if function is Function.SUM:
                return self._sum(arguments)
            if function is Function.AVERAGE:
                return self._finite(
                    self.context.divide(self._sum(arguments), Decimal(len(arguments)))
                )
            return self._unary(function, arguments[0])

    @staticmethod
    def check_arguments(function: Function, arguments: Sequence[Decimal]) -> None:
        """Reject argument counts the function can't accept."""
        name = function.value
        if not arguments:
            raise EmptyArgumentListError(f"{name}() requires at least one argument", token=name)
        if function_descriptor(function).arity is Arity.UNARY and len(arguments) != 1:
            raise ArgumentCountError(
                f"{name}() takes exactly one argument, got {len(arguments)}", token=name
            )

    def _unary(self, function: Function, x: Decimal) -> Decimal:
        name = function.value
        if function is Function.CEIL:
            return self._finite(x.quantize(_ONE, rounding=decimal.ROUND_CEILING, context=self._exact))
        if function is Function.FLOOR:
            return self._finite(x.quantize(_ONE, rounding=decimal.ROUND_FLOOR, context=self._exact))
        if function is Function.ROUND:
            return self._finite(x.quantize(_ONE, rounding=self.rounding, context=self._exact))
        if function is Function.ABS:
            return self._finite(self._exact.abs(x))
        if function is Function.SQRT:
            if x < 0:
                raise DomainError(f"sqrt() of negative number {x}", token=name)
            return self._finite(self.context.sqrt(x))
        if function in (Function.LOG, Function.LOG10):
            if x <= 0:
                raise DomainError(f"{name}() of non-positive number {x}", token=name)
            if function is Function.LOG:
                return self._finite(self.context.ln(x))
            return self._finite(self.context.log10(x))
        if function is Function.EXP:
            return self._finite(self.context.exp(x))
        return self._transcendental(function, x)

    def _transcendental(self, function: Function, x: Decimal) -> Decimal:
        digits = self.precision + GUARD_DIGITS
        value = _SYMPY_FUNCTIONS[function](sp.Float(str(x), digits)).evalf(digits)
        if value.is_real is not True or value.is_finite is not True:
            raise DomainError(f"{function.value}({x}) is undefined for real numbers", token=function.value)
        result = self.context.plus(Decimal(str(value)))
        return self._finite(self._canonical(result))

    def _sum(self, values: Sequence[Decimal]) -> Decimal:
        total = values[0]
        for value in values[1:]:
            total = self._exact.add(total, value)
        return self._finite(total)

    # Helpers

    def _canonical(self, value: Decimal) -> Decimal:
        """Strip trailing zeros left over from SymPy's fixed-width output."""
        value = value.normalize(self.context)
        if value.as_tuple().exponent > 0 and value.adjusted() < self.precision:
            value = value.quantize(_ONE, context=self.context)
        return value

    @staticmethod
    def _check_divisor(divisor: Decimal, symbol: str) -> None:
        if divisor.is_zero():
            raise DivisionByZeroError("Division by zero", token=symbol)

    @staticmethod
    def _finite(value: Decimal) -> Decimal:
        if not value.is_finite():
            raise DomainError(f"Result is not a finite number: {value}")
        if value.is_zero() and value.is_signed():
            return value.copy_abs()
        return value

    @contextmanager
    def _signals(self, symbol: str):
        """Translate trapped decimal signals into calculation errors."""
        try:
            yield
        except decimal.DivisionByZero as exc:
            raise DivisionByZeroError("Division by zero", token=symbol) from exc
        except decimal.Overflow as exc:
            raise DomainError(f"Result of '{symbol}' is out of range", token=symbol) from exc
        except decimal.Underflow as exc:
            raise DomainError(f"Result of '{symbol}' is too small to represent", token=symbol) from exc
        except decimal.InvalidOperation as exc:
            raise DomainError(f"Invalid operation in '{symbol}'", token=symbol) from exc
