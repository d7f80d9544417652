"""Tests for the symbol registry tables."""

import pytest

from neumann_pkg.registry import (
    CLOSE_BRACKETS,
    CONSTANTS,
    FUNCTIONS,
    OPEN_BRACKETS,
    OPERATORS,
    Arity,
    Associativity,
    BracketKind,
    Constant,
    Function,
    Operator,
    bracket_symbols,
    function_descriptor,
    operator_descriptor,
)


def test_operator_table():
    assert OPERATORS["^"] is Operator.EXPONENT
    assert OPERATORS["!"] is Operator.NEGATE
    assert set(OPERATORS) == set("-+*/%!^")
    exponent = operator_descriptor(Operator.EXPONENT)
    assert exponent.associativity is Associativity.RIGHT
    assert exponent.precedence == 4


def test_precedence_order():
    precedence = {op: operator_descriptor(op).precedence for op in Operator}
    assert precedence[Operator.PLUS] == precedence[Operator.MINUS] == 1
    assert (
        precedence[Operator.MULTIPLY]
        == precedence[Operator.DIVIDE]
        == precedence[Operator.MODULO]
        == 2
    )
    assert precedence[Operator.NEGATE] == 3
    assert operator_descriptor(Operator.NEGATE).arity is Arity.UNARY


def test_function_table():
    assert FUNCTIONS["avg"] is Function.AVERAGE
    assert FUNCTIONS["asin"] is Function.ARC_SINE
    assert FUNCTIONS["acos"] is Function.ARC_COSINE
    assert len(FUNCTIONS) == len(Function)
    for name in ("min", "max", "sum", "avg"):
        assert function_descriptor(FUNCTIONS[name]).arity is Arity.VARIADIC
    assert function_descriptor(Function.SQRT).arity is Arity.UNARY


def test_brackets():
    for kind in BracketKind:
        opening, closing = bracket_symbols(kind)
        assert OPEN_BRACKETS[opening] is kind
        assert CLOSE_BRACKETS[closing] is kind
    assert bracket_symbols(BracketKind.SQUARE) == ("[", "]")


def test_constants():
    assert CONSTANTS == {"pi": Constant.PI, "e": Constant.E}


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        OPERATORS["**"] = Operator.EXPONENT
