"""Type definitions, result dataclasses and the error hierarchy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EvalResult:
    """Result of evaluating an arithmetic expression."""

    ok: bool
    result: str | None = None
    error: str | None = None
    error_code: str | None = None
    position: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.position is not None:
            result_dict["position"] = self.position
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, result={self.result!r})"


class NeumannError(Exception):
    """Base class for every failure raised while evaluating an expression.

    ``token`` and ``position`` locate the offending input when known.
    """

    code = "EVALUATION_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        token: str | None = None,
        position: int | None = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        self.token = token
        self.position = position
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class ValidationError(NeumannError):
    """Raised when input validation fails before evaluation starts."""

    code = "VALIDATION_ERROR"


# Lexical


class NumberFormatError(NeumannError):
    """A literal is neither a known constant nor a parseable number."""

    code = "NUMBER_FORMAT"


# Syntactic


class ExpressionSyntaxError(NeumannError):
    """Base class for structural errors in the token sequence."""

    code = "SYNTAX_ERROR"


class LeadingCloseBracketError(ExpressionSyntaxError):
    code = "LEADING_CLOSE_BRACKET"


class DanglingArgumentError(ExpressionSyntaxError):
    code = "DANGLING_ARGUMENT"


class UnbalancedBracketsError(ExpressionSyntaxError):
    code = "UNBALANCED_BRACKETS"


class BracketMismatchError(ExpressionSyntaxError):
    code = "BRACKET_MISMATCH"


class LeadingSeparatorError(ExpressionSyntaxError):
    code = "LEADING_SEPARATOR"


class MissingArgumentError(ExpressionSyntaxError):
    code = "MISSING_ARGUMENT"


class SeparatorOutsideGroupError(ExpressionSyntaxError):
    code = "SEPARATOR_OUTSIDE_GROUP"


class SeparatorOutsideFunctionError(ExpressionSyntaxError):
    code = "SEPARATOR_OUTSIDE_FUNCTION"


class AdjacentLiteralError(ExpressionSyntaxError):
    code = "ADJACENT_LITERAL"


class MalformedExpressionError(ExpressionSyntaxError):
    code = "MALFORMED_EXPRESSION"


# Semantic


class SemanticError(NeumannError):
    """Operator or function used with an argument count it cannot accept."""

    code = "SEMANTIC_ERROR"


class UnsupportedArityError(SemanticError):
    code = "UNSUPPORTED_ARITY"


class ArgumentCountError(SemanticError):
    code = "ARGUMENT_COUNT"


# Arithmetic


class CalculationError(NeumannError):
    """Base class for failures raised by the arithmetic backend."""

    code = "CALCULATION_ERROR"


class DivisionByZeroError(CalculationError):
    code = "DIVISION_BY_ZERO"


class EmptyArgumentListError(CalculationError):
    code = "EMPTY_ARGUMENT_LIST"


class DomainError(CalculationError):
    code = "DOMAIN_ERROR"
