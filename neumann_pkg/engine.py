"""Shunting-yard evaluation engine.

The engine consumes classified tokens one at a time. Its state is three
stacks: computed values, pending symbols (operators, functions and open
brackets) and, for every pending function, the value-stack depth at the
moment the function was pushed. The depth snapshot is what lets variadic
functions count their arguments when the call's closing bracket arrives.

``ShuntingYard.step`` is pure: it takes a state and a token and returns a new
state, or raises. Values are computed as soon as precedence allows, so no
parse tree is ever built.

The backend is any object providing ``parse_number``, ``evaluate_constant``,
``evaluate_operator`` and ``evaluate_function`` (see ``arithmetic.Arithmetic``).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

from .arithmetic import Arithmetic
from .logging_config import get_logger
from .registry import CONSTANTS, Arity, Associativity, Operator, operator_descriptor
from .tokens import (
    CloseBracketToken,
    FunctionToken,
    LiteralToken,
    OpenBracketToken,
    OperatorToken,
    SeparatorToken,
    Token,
    classify_expression,
)
from .types import (
    AdjacentLiteralError,
    BracketMismatchError,
    DanglingArgumentError,
    LeadingCloseBracketError,
    LeadingSeparatorError,
    MalformedExpressionError,
    MissingArgumentError,
    NeumannError,
    SeparatorOutsideFunctionError,
    SeparatorOutsideGroupError,
    UnbalancedBracketsError,
    UnsupportedArityError,
)

logger = get_logger("engine")

Symbol = Union[OperatorToken, FunctionToken, OpenBracketToken]


@dataclass(frozen=True)
class EvaluationState:
    """Stacks of one evaluation; the top of each stack is its last element."""

    values: tuple[Decimal, ...] = ()
    symbols: tuple[Symbol, ...] = ()
    snapshots: tuple[int, ...] = ()
    previous: Optional[Token] = None


def _in_prefix_position(previous: Optional[Token]) -> bool:
    """True when no operand can end right before the next token."""
    return previous is None or isinstance(
        previous, (OperatorToken, OpenBracketToken, SeparatorToken)
    )


def _locate(exc: NeumannError, token: Token) -> None:
    if exc.token is None:
        exc.token = str(token)
    if exc.position is None:
        exc.position = token.position


class ShuntingYard:
    """Evaluates infix token sequences with operator precedence."""

    def __init__(self, backend: Any = None):
        self.backend = Arithmetic() if backend is None else backend

    def initial_state(self) -> EvaluationState:
        return EvaluationState()

    def evaluate(self, expression: str) -> Decimal:
        """Lex, classify and evaluate an expression string."""
        return self.run(classify_expression(expression))

    def run(self, tokens: Iterable[Token]) -> Decimal:
        state = self.initial_state()
        for token in tokens:
            state = self.step(state, token)
        return self.finish(state)

    def step(self, state: EvaluationState, token: Token) -> EvaluationState:
        """Handle one token and return the resulting state."""
        logger.debug("Handling %r", token, extra={"position": token.position})
        previous = state.previous
        values = list(state.values)
        symbols = list(state.symbols)
        snapshots = list(state.snapshots)

        try:
            if isinstance(previous, FunctionToken) and not isinstance(token, OpenBracketToken):
                raise MalformedExpressionError(
                    f"Function '{previous}' must be followed by an opening bracket"
                )
            if isinstance(token, OpenBracketToken):
                symbols.append(token)
            elif isinstance(token, CloseBracketToken):
                self._close_bracket(previous, token, values, symbols, snapshots)
            elif isinstance(token, SeparatorToken):
                self._separator(previous, values, symbols)
            elif isinstance(token, FunctionToken):
                symbols.append(token)
                snapshots.append(len(values))
            elif isinstance(token, OperatorToken):
                token = self._operator(previous, token, values, symbols)
            else:
                self._literal(previous, token, values)
        except NeumannError as exc:
            _locate(exc, token)
            raise

        return EvaluationState(tuple(values), tuple(symbols), tuple(snapshots), token)

    def finish(self, state: EvaluationState) -> Decimal:
        """Drain the pending symbols and return the single remaining value."""
        previous = state.previous
        if isinstance(previous, OperatorToken):
            exc = MalformedExpressionError(f"Operator '{previous}' is missing its right operand")
            _locate(exc, previous)
            raise exc
        if isinstance(previous, FunctionToken):
            exc = MalformedExpressionError(
                f"Function '{previous}' must be followed by an opening bracket"
            )
            _locate(exc, previous)
            raise exc

        values = list(state.values)
        symbols = list(state.symbols)
        while symbols:
            symbol = symbols.pop()
            if isinstance(symbol, OpenBracketToken):
                exc = UnbalancedBracketsError(f"Bracket '{symbol}' is never closed")
                _locate(exc, symbol)
                raise exc
            self._apply(values, symbol)

        if len(values) != 1:
            raise MalformedExpressionError(
                f"Expression must reduce to exactly one value, found {len(values)}"
            )
        return values[0]

    # Transitions

    def _close_bracket(self, previous, token, values, symbols, snapshots) -> None:
        if previous is None:
            raise LeadingCloseBracketError("Expression can't start with a closing bracket")
        if isinstance(previous, SeparatorToken):
            raise DanglingArgumentError("Argument is missing before the closing bracket")
        if isinstance(previous, OperatorToken):
            raise MalformedExpressionError(f"Operator '{previous}' is missing its right operand")

        while True:
            if not symbols:
                raise UnbalancedBracketsError(f"Closing bracket '{token}' has no opening bracket")
            symbol = symbols.pop()
            if isinstance(symbol, OpenBracketToken):
                if symbol.kind is not token.kind:
                    raise BracketMismatchError(
                        f"Bracket '{symbol}' at position {symbol.position} closed by '{token}'"
                    )
                break
            self._apply(values, symbol)

        if symbols and isinstance(symbols[-1], FunctionToken):
            function = symbols.pop()
            snapshot = snapshots.pop()
            arguments = values[snapshot:]
            del values[snapshot:]
            values.append(self._call(function, arguments))

    def _separator(self, previous, values, symbols) -> None:
        if previous is None:
            raise LeadingSeparatorError("Expression can't start with an argument separator")
        if isinstance(previous, (OpenBracketToken, SeparatorToken)):
            raise MissingArgumentError("Argument is missing before the separator")
        if isinstance(previous, OperatorToken):
            raise MalformedExpressionError(f"Operator '{previous}' is missing its right operand")

        while symbols and not isinstance(symbols[-1], OpenBracketToken):
            self._apply(values, symbols.pop())
        if not symbols:
            raise SeparatorOutsideGroupError("Argument separator used outside of brackets")
        if len(symbols) < 2 or not isinstance(symbols[-2], FunctionToken):
            raise SeparatorOutsideFunctionError("Argument separator used outside of function scope")

    def _operator(self, previous, token: OperatorToken, values, symbols) -> OperatorToken:
        prefix = _in_prefix_position(previous)
        if prefix and token.operator is Operator.MINUS:
            token = OperatorToken(Operator.NEGATE, token.position)
        descriptor = operator_descriptor(token.operator)

        if descriptor.arity is Arity.UNARY:
            if not prefix:
                raise MalformedExpressionError(
                    f"Unary operator '{descriptor.symbol}' can't follow an operand"
                )
            symbols.append(token)
            return token
        if prefix:
            raise MalformedExpressionError(
                f"Operator '{descriptor.symbol}' is missing its left operand"
            )

        while symbols and isinstance(symbols[-1], OperatorToken):
            top = operator_descriptor(symbols[-1].operator)
            if (
                top.associativity is Associativity.LEFT
                and descriptor.precedence <= top.precedence
            ) or descriptor.precedence < top.precedence:
                self._apply(values, symbols.pop())
            else:
                break
        symbols.append(token)
        return token

    def _literal(self, previous, token: LiteralToken, values) -> None:
        if isinstance(previous, LiteralToken):
            raise AdjacentLiteralError(f"Literal '{token}' can't follow literal '{previous}'")
        constant = CONSTANTS.get(token.text)
        if constant is not None:
            values.append(self.backend.evaluate_constant(constant))
        else:
            values.append(self.backend.parse_number(token.text))

    # Application

    def _apply(self, values: list, symbol: Symbol) -> None:
        """Pop a pending operator's operands, evaluate it and push the result."""
        if not isinstance(symbol, OperatorToken):
            exc = MalformedExpressionError(f"Unexpected '{symbol}' in expression")
            _locate(exc, symbol)
            raise exc

        descriptor = operator_descriptor(symbol.operator)
        try:
            count = self._operand_count(descriptor.arity)
            if len(values) < count:
                raise MalformedExpressionError(
                    f"Operator '{descriptor.symbol}' is missing an operand"
                )
            operands = values[len(values) - count:]
            del values[len(values) - count:]
            logger.debug(
                "Applying %s to %s", descriptor.symbol, operands,
                extra={"position": symbol.position},
            )
            values.append(self.backend.evaluate_operator(symbol.operator, operands))
        except NeumannError as exc:
            _locate(exc, symbol)
            raise

    def _call(self, function: FunctionToken, arguments: list) -> Decimal:
        logger.debug(
            "Calling %s with %d argument(s)", function, len(arguments),
            extra={"position": function.position},
        )
        try:
            return self.backend.evaluate_function(function.function, arguments)
        except NeumannError as exc:
            _locate(exc, function)
            raise

    @staticmethod
    def _operand_count(arity: Arity) -> int:
        if arity is Arity.UNARY:
            return 1
        if arity is Arity.BINARY:
            return 2
        raise UnsupportedArityError(f"Operators can't take {arity.value} operands")
