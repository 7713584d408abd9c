"""Test class ExpressionParser."""

import pytest

from rpn_calculator.common.errors import (
    CalculatorError,
    DomainError,
    ErrorKind,
    MalformedExpressionError,
    StackUnderflowError,
    UnknownCharacterError,
    UnmatchedBracketError,
)
from rpn_calculator.common.parser import ExpressionParser


def test_tokenize_basic():
    """Tokenize splits a simple expression into correct tokens."""
    expr = "3 + 4 * 2"
    tokens = ExpressionParser.tokenize(expr)
    assert tokens == ["3", "+", "4", "*", "2"]


@pytest.mark.parametrize("token,expected", [
    ("123", True),
    ("45.67", True),
    (".5", True),
    ("-8.9", False),
    ("abc", False),
    ("+", False),
])
def test_is_number(token, expected):
    """_is_number correctly identifies number tokens."""
    assert ExpressionParser._is_number(token) == expected


def test_to_rpn_basic():
    """to_rpn converts tokens to correct Reverse Polish Notation."""
    tokens = ["3", "+", "4", "*", "2"]
    rpn = ExpressionParser.to_rpn(tokens)
    # Numbers in order, operators according to precedence
    assert rpn == ["3", "4", "2", "*", "+"]


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", 7.0),
    ("10 - 2", 8.0),
    ("3 * 5", 15.0),
    ("8 / 2", 4.0),
    ("3 + 4 * 2", 11.0),  # tests precedence
    ("(3 + 4) * 2", 14.0),
    ("7 + 3 * 2 - 4 / 2", 11.0),
    ("2 ^ 3 ^ 2", 512.0),  # right-associative power
    ("2 - 3 - 1", -2.0),  # left-associative subtraction
    ("5 !", 120.0),
    ("3! + 2 ^ 2", 10.0),
    ("sqrt ( 16 )", 4.0),
    ("sin ( 0 )", 0.0),
    ("log(1000) * {2 + [1 - 1]}", 6.0),
    ("sqrt(sqrt(81)) ^ 2", 9.0),
])
def test_evaluate_valid(expr, expected):
    """Evaluate returns correct result for valid expressions."""
    result = ExpressionParser.evaluate(expr)
    assert result == pytest.approx(expected)


@pytest.mark.parametrize("expr,error", [
    ("3 +", StackUnderflowError),  # Trailing operator
    ("3 4", MalformedExpressionError),  # Missing operator
    ("3 4 + 5", MalformedExpressionError),  # Extra operand remaining
    ("", MalformedExpressionError),  # Empty expression
    ("( 1 + 2", UnmatchedBracketError),
    ("1 + 2 )", UnmatchedBracketError),
    ("(0 - 1)!", DomainError),
    ("2.5!", DomainError),
    ("1 / (2 - 2)", DomainError),
    ("3 % 2", UnknownCharacterError),
])
def test_evaluate_invalid_expression(expr, error):
    """Evaluate raises the matching CalculatorError for malformed expressions."""
    with pytest.raises(error):
        ExpressionParser.evaluate(expr)


def test_errors_are_value_errors():
    """Callers may keep catching ValueError."""
    with pytest.raises(ValueError) as exc_info:
        ExpressionParser.evaluate("3 *")
    assert isinstance(exc_info.value, CalculatorError)
    assert exc_info.value.kind is ErrorKind.STACK_UNDERFLOW


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", ["3", "4", "+"]),
    ("3 + 4 * 2", ["3", "4", "2", "*", "+"]),
    ("10 / 2 - 1", ["10", "2", "/", "1", "-"]),
    ("sqrt(16) + 3!", ["16", "sqrt", "3", "!", "+"]),
])
def test_to_rpn_various(expr, expected):
    """to_rpn handles multiple expressions correctly."""
    tokens = ExpressionParser.tokenize(expr)
    rpn = ExpressionParser.to_rpn(tokens)
    assert rpn == expected


def test_evaluate_is_repeatable():
    """Evaluating the same input twice gives the same result, even after a failure."""
    expr = "(2 + 3) * 4 ^ 2 / sqrt(4)"
    first = ExpressionParser.evaluate(expr)
    with pytest.raises(UnmatchedBracketError):
        ExpressionParser.evaluate("(1 + (2")
    second = ExpressionParser.evaluate(expr)
    assert first == second == 40.0


def test_max_tokens_expression():
    """An expression of exactly 1000 tokens evaluates; 1001 tokens do not."""
    expr = "+".join(["1"] * 499) + "+3!"
    assert len(ExpressionParser.tokenize(expr)) == 1000
    assert ExpressionParser.evaluate(expr) == 505.0
    with pytest.raises(CalculatorError) as exc_info:
        ExpressionParser.evaluate(expr + "+1")
    assert exc_info.value.kind is ErrorKind.TOO_MANY_TOKENS
