"""Test that API functions return typed results and structured errors."""

import pytest

from neumann_pkg.api import (
    evaluate,
    evaluate_expression,
    tokenize_expression,
    validate_expression,
)
from neumann_pkg.registry import BracketKind, Function
from neumann_pkg.tokens import (
    CloseBracketToken,
    FunctionToken,
    LiteralToken,
    OpenBracketToken,
    SeparatorToken,
)
from neumann_pkg.types import (
    BracketMismatchError,
    DivisionByZeroError,
    EvalResult,
    ValidationError,
)


class TestEvaluate:
    """evaluate() never raises for bad expressions."""

    def test_evaluate_returns_eval_result(self):
        result = evaluate("2 + 2")
        assert isinstance(result, EvalResult)
        assert result.ok is True
        assert result.result == "4"
        assert result.error is None

    def test_evaluate_error_returns_eval_result(self):
        result = evaluate("(1+2]")
        assert isinstance(result, EvalResult)
        assert result.ok is False
        assert result.error_code == "BRACKET_MISMATCH"
        assert result.position == 4
        assert "position 4" in result.error

    def test_precision_argument(self):
        assert evaluate("1/3", precision=5).result == "0.33333"
        assert evaluate("1/3").result == "0.33333333333333333333"

    def test_precision_does_not_affect_exact_operations(self):
        assert evaluate("123456789 * 1000001", precision=3).result == "123456912456789"

    @pytest.mark.parametrize(
        "expression, code",
        [
            ("", "EMPTY_INPUT"),
            ("   ", "EMPTY_INPUT"),
            ("x" * 10001, "TOO_LONG"),
            (42, "INVALID_TYPE"),
            (None, "INVALID_TYPE"),
        ],
    )
    def test_validation_codes(self, expression, code):
        result = evaluate(expression)
        assert result.ok is False
        assert result.error_code == code

    @pytest.mark.parametrize("precision", [0, -3, 1001])
    def test_invalid_precision(self, precision):
        result = evaluate("1/3", precision=precision)
        assert result.error_code == "INVALID_PRECISION"

    def test_to_dict_only_carries_set_fields(self):
        assert evaluate("2*3").to_dict() == {"ok": True, "result": "6"}
        data = evaluate("1/0").to_dict()
        assert data["ok"] is False
        assert data["error_code"] == "DIVISION_BY_ZERO"
        assert data["position"] == 1
        assert "result" not in data

    def test_repr(self):
        assert repr(evaluate("1+1")) == "EvalResult(ok=True, result='2')"
        assert "ADJACENT_LITERAL" in repr(evaluate("2 3"))


class TestEvaluateExpression:
    """evaluate_expression() returns a string or raises."""

    def test_returns_string(self):
        assert evaluate_expression("2^3^2") == "512"
        assert evaluate_expression("max(1, sin(pi/2))") == "1"

    def test_raises_typed_errors(self):
        with pytest.raises(BracketMismatchError):
            evaluate_expression("(1+2]")
        with pytest.raises(DivisionByZeroError):
            evaluate_expression("1/0")
        with pytest.raises(ValidationError) as exc_info:
            evaluate_expression("")
        assert exc_info.value.code == "EMPTY_INPUT"

    def test_input_length_limit_is_read_at_call_time(self, monkeypatch):
        from neumann_pkg import config

        monkeypatch.setattr(config, "MAX_INPUT_LENGTH", 5)
        with pytest.raises(ValidationError) as exc_info:
            evaluate_expression("1+2+3+4")
        assert exc_info.value.code == "TOO_LONG"
        assert evaluate_expression("1+2") == "3"


class TestValidateExpression:
    """validate_expression() checks structure only."""

    def test_valid(self):
        assert validate_expression("sum(1, 2, 3) * 4") == (True, None)

    def test_arithmetic_failures_are_not_reported(self):
        assert validate_expression("1/0") == (True, None)
        assert validate_expression("sqrt(-1)") == (True, None)

    @pytest.mark.parametrize(
        "expression",
        ["(1+2]", "1,2", "2 3", "abc", "max()", "sin(1, 2)", "2+", ""],
    )
    def test_invalid(self, expression):
        ok, message = validate_expression(expression)
        assert ok is False
        assert message


class TestTokenizeExpression:
    def test_tokens(self):
        assert tokenize_expression("max(1, 2)") == [
            FunctionToken(Function.MAX),
            OpenBracketToken(BracketKind.PARENTHESIS),
            LiteralToken("1"),
            SeparatorToken(),
            LiteralToken("2"),
            CloseBracketToken(BracketKind.PARENTHESIS),
        ]

    def test_positions(self):
        tokens = tokenize_expression("max(1, 2)")
        assert [token.position for token in tokens] == [0, 3, 4, 5, 7, 8]

    def test_rejects_empty_input(self):
        with pytest.raises(ValidationError):
            tokenize_expression(" ")
