"""Token model and classifier.

A token is exactly one of six frozen dataclasses. ``classify`` maps a trimmed
raw substring to its token using the symbol registry; unmatched text always
becomes a literal and is validated later, when it is parsed as a number.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .lexer import ExpressionTokenizer
from .registry import (
    CLOSE_BRACKETS,
    FUNCTIONS,
    OPEN_BRACKETS,
    OPERATORS,
    SEPARATOR,
    BracketKind,
    Function,
    Operator,
    bracket_symbols,
    operator_descriptor,
)


@dataclass(frozen=True)
class LiteralToken:
    text: str
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class OperatorToken:
    operator: Operator
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return operator_descriptor(self.operator).symbol


@dataclass(frozen=True)
class FunctionToken:
    function: Function
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return self.function.value


@dataclass(frozen=True)
class OpenBracketToken:
    kind: BracketKind
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return bracket_symbols(self.kind)[0]


@dataclass(frozen=True)
class CloseBracketToken:
    kind: BracketKind
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return bracket_symbols(self.kind)[1]


@dataclass(frozen=True)
class SeparatorToken:
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return SEPARATOR


Token = Union[
    LiteralToken,
    OperatorToken,
    FunctionToken,
    OpenBracketToken,
    CloseBracketToken,
    SeparatorToken,
]


def classify(text: str, position: int = 0) -> Token:
    """Map one trimmed, non-empty raw substring to a token.

    Resolution order: separator, function name, operator symbol, bracket,
    and finally literal.
    """
    if text == SEPARATOR:
        return SeparatorToken(position)
    if text in FUNCTIONS:
        return FunctionToken(FUNCTIONS[text], position)
    if text in OPERATORS:
        return OperatorToken(OPERATORS[text], position)
    if text in OPEN_BRACKETS:
        return OpenBracketToken(OPEN_BRACKETS[text], position)
    if text in CLOSE_BRACKETS:
        return CloseBracketToken(CLOSE_BRACKETS[text], position)
    return LiteralToken(text, position)


def classify_expression(expression: str) -> list[Token]:
    """Lex and classify a whole expression, skipping empty tokens."""
    return [
        classify(text, position)
        for position, text in ExpressionTokenizer(expression).scan()
        if text
    ]
