"""Public API for Neumann - returns structured objects without side effects."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from . import config
from .arithmetic import Arithmetic
from .engine import ShuntingYard
from .evaluator import Neumann
from .logging_config import get_logger
from .registry import Constant, Function, Operator
from .tokens import Token, classify_expression
from .types import EvalResult, NeumannError, ValidationError

logger = get_logger("api")


def _validate_input(expression: str, precision: int | None = None) -> None:
    """Check input limits before any token is handled.

    Raises:
        ValidationError: with code INVALID_TYPE, EMPTY_INPUT, TOO_LONG or
            INVALID_PRECISION
    """
    if not isinstance(expression, str):
        raise ValidationError(
            f"Expected string expression, got {type(expression).__name__}",
            code="INVALID_TYPE",
        )
    if not expression.strip():
        raise ValidationError("Empty expression", code="EMPTY_INPUT")
    if len(expression) > config.MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long ({len(expression)} characters, limit {config.MAX_INPUT_LENGTH})",
            code="TOO_LONG",
        )
    if precision is not None and not 1 <= precision <= config.MAX_PRECISION:
        raise ValidationError(
            f"Precision must be between 1 and {config.MAX_PRECISION}, got {precision}",
            code="INVALID_PRECISION",
        )


def evaluate_expression(expression: str, precision: int | None = None) -> str:
    """Evaluate an expression and return the decimal string of the result.

    Args:
        expression: Arithmetic expression (e.g., "2+3*4", "max(1, sin(pi/2))")
        precision: Significant digits for inexact operations (default: config.PRECISION)

    Returns:
        Result rendered as a decimal string

    Raises:
        NeumannError: on the first invalid token or failed operation

    Example:
        >>> evaluate_expression("2^3^2")
        '512'
    """
    _validate_input(expression, precision)
    return Neumann.input(expression, precision=precision).evaluate()


def evaluate(expression: str, precision: int | None = None) -> EvalResult:
    """Evaluate an expression without raising on evaluation errors.

    Args:
        expression: Arithmetic expression string
        precision: Significant digits for inexact operations (optional)

    Returns:
        EvalResult with the result, or with error message, code and position

    Example:
        >>> evaluate("avg(2, 4)").result
        '3'
        >>> evaluate("1,2").error_code
        'SEPARATOR_OUTSIDE_GROUP'
    """
    try:
        result = evaluate_expression(expression, precision)
    except NeumannError as e:
        logger.info(
            "Evaluation of %r failed: %s", expression, e,
            extra={"code": e.code, "position": e.position},
        )
        return EvalResult(
            ok=False, error=str(e), error_code=e.code, position=e.position
        )
    return EvalResult(ok=True, result=result)


_ONE = Decimal(1)


class _StructureOnly(Arithmetic):
    """Backend that checks literals and argument counts but skips the arithmetic."""

    def evaluate_constant(self, constant: Constant) -> Decimal:
        return _ONE

    def evaluate_operator(self, operator: Operator, operands: Sequence[Decimal]) -> Decimal:
        return _ONE

    def evaluate_function(self, function: Function, arguments: Sequence[Decimal]) -> Decimal:
        self.check_arguments(function, arguments)
        return _ONE


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Validate an expression without computing it.

    Literals, bracket structure, separators and argument counts are checked;
    arithmetic failures such as division by zero are not.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_expression("1/0")
        (True, None)
        >>> validate_expression("(1+2]")[0]
        False
    """
    try:
        _validate_input(expression)
        ShuntingYard(_StructureOnly()).evaluate(expression)
    except NeumannError as e:
        return False, str(e)
    return True, None


def tokenize_expression(expression: str) -> list[Token]:
    """Lex and classify an expression into tokens, without evaluating it."""
    _validate_input(expression)
    return classify_expression(expression)
