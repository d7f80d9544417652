"""Symbol registry: operators, functions, brackets and constants.

Every textual pattern maps to exactly one identity through an immutable table
built at import time. Lookups are plain key queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class Arity(Enum):
    UNARY = "unary"
    BINARY = "binary"
    VARIADIC = "variadic"  # one or more arguments, counted at call time


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


class Operator(Enum):
    NEGATE = "negate"
    MINUS = "minus"
    PLUS = "plus"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    EXPONENT = "exponent"
    MODULO = "modulo"


class Function(Enum):
    CEIL = "ceil"
    FLOOR = "floor"
    ROUND = "round"
    ABS = "abs"
    SINE = "sin"
    COSINE = "cos"
    TANGENT = "tan"
    ARC_SINE = "asin"
    ARC_COSINE = "acos"
    ARC_TANGENT = "atan"
    HYPERBOLIC_SINE = "sinh"
    HYPERBOLIC_COSINE = "cosh"
    HYPERBOLIC_TANGENT = "tanh"
    MIN = "min"
    MAX = "max"
    SUM = "sum"
    AVERAGE = "avg"
    LOG = "log"
    LOG10 = "log10"
    EXP = "exp"
    SQRT = "sqrt"


class BracketKind(Enum):
    PARENTHESIS = 0
    SQUARE = 1
    CURLY = 2
    ANGLE = 3


class Constant(Enum):
    PI = "pi"
    E = "e"


@dataclass(frozen=True)
class OperatorDescriptor:
    symbol: str
    arity: Arity
    associativity: Associativity
    precedence: int


@dataclass(frozen=True)
class FunctionDescriptor:
    name: str
    arity: Arity


OPERATOR_DESCRIPTORS = MappingProxyType(
    {
        Operator.MINUS: OperatorDescriptor("-", Arity.BINARY, Associativity.LEFT, 1),
        Operator.PLUS: OperatorDescriptor("+", Arity.BINARY, Associativity.LEFT, 1),
        Operator.MULTIPLY: OperatorDescriptor("*", Arity.BINARY, Associativity.LEFT, 2),
        Operator.DIVIDE: OperatorDescriptor("/", Arity.BINARY, Associativity.LEFT, 2),
        Operator.MODULO: OperatorDescriptor("%", Arity.BINARY, Associativity.LEFT, 2),
        Operator.NEGATE: OperatorDescriptor("!", Arity.UNARY, Associativity.RIGHT, 3),
        Operator.EXPONENT: OperatorDescriptor("^", Arity.BINARY, Associativity.RIGHT, 4),
    }
)

_VARIADIC_FUNCTIONS = {Function.MIN, Function.MAX, Function.SUM, Function.AVERAGE}

FUNCTION_DESCRIPTORS = MappingProxyType(
    {
        function: FunctionDescriptor(
            function.value,
            Arity.VARIADIC if function in _VARIADIC_FUNCTIONS else Arity.UNARY,
        )
        for function in Function
    }
)

OPERATORS = MappingProxyType(
    {descriptor.symbol: operator for operator, descriptor in OPERATOR_DESCRIPTORS.items()}
)
FUNCTIONS = MappingProxyType({function.value: function for function in Function})
CONSTANTS = MappingProxyType({constant.value: constant for constant in Constant})

OPEN_BRACKETS = MappingProxyType(
    {
        "(": BracketKind.PARENTHESIS,
        "[": BracketKind.SQUARE,
        "{": BracketKind.CURLY,
        "<": BracketKind.ANGLE,
    }
)
CLOSE_BRACKETS = MappingProxyType(
    {
        ")": BracketKind.PARENTHESIS,
        "]": BracketKind.SQUARE,
        "}": BracketKind.CURLY,
        ">": BracketKind.ANGLE,
    }
)

SEPARATOR = ","


def operator_descriptor(operator: Operator) -> OperatorDescriptor:
    return OPERATOR_DESCRIPTORS[operator]


def function_descriptor(function: Function) -> FunctionDescriptor:
    return FUNCTION_DESCRIPTORS[function]


def bracket_symbols(kind: BracketKind) -> tuple[str, str]:
    """Return the (open, close) text pair for a bracket kind."""
    opening = next(text for text, k in OPEN_BRACKETS.items() if k is kind)
    closing = next(text for text, k in CLOSE_BRACKETS.items() if k is kind)
    return opening, closing
