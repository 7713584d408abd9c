"""Test the tokenizer."""
import pytest

from rpn_calculator.common.errors import NullInputError, TooManyTokensError, UnknownCharacterError
from rpn_calculator.common.settings import CalculatorLimits
from rpn_calculator.common.tokenizer import tokenize


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4 * 2", ["3", "+", "4", "*", "2"]),
    ("3+4*2", ["3", "+", "4", "*", "2"]),
    ("sqrt(16)", ["sqrt", "(", "16", ")"]),
    ("[1.5 - .5] ^ {2}", ["[", "1.5", "-", ".5", "]", "^", "{", "2", "}"]),
    ("5!", ["5", "!"]),
    ("2sin(0)", ["2", "sin", "(", "0", ")"]),
    ("1.2.3", ["1.2.3"]),
    ("foo", ["foo"]),
    ("  \t\n ", []),
    ("", []),
])
def test_tokenize(expr, expected):
    """Runs of digits/dots and of letters form tokens, other glyphs stand alone."""
    assert tokenize(expr) == expected


@pytest.mark.parametrize("expr,char,position", [
    ("3 % 2", "%", 2),
    ("1, 2", ",", 1),
    ("x = 1", "=", 2),
    ("2 ² ", "²", 2),
])
def test_tokenize_unknown_character(expr, char, position):
    with pytest.raises(UnknownCharacterError) as exc_info:
        tokenize(expr)
    assert exc_info.value.token == char
    assert exc_info.value.position == position


def test_tokenize_none():
    with pytest.raises(NullInputError):
        tokenize(None)


def test_long_runs_are_split():
    """A run longer than the token capacity continues in a new token."""
    tokens = tokenize("1" * 70)
    assert tokens == ["1" * 63, "1" * 7]


def test_exactly_max_tokens_succeeds():
    expr = "+".join(["1"] * 500) + "+"
    tokens = tokenize(expr)
    assert len(tokens) == 1000


def test_one_token_too_many_fails():
    expr = "+".join(["1"] * 501)
    with pytest.raises(TooManyTokensError):
        tokenize(expr)


def test_custom_limits():
    limits = CalculatorLimits(max_tokens=3, max_token_length=2)
    assert tokenize("123", limits) == ["12", "3"]
    with pytest.raises(TooManyTokensError):
        tokenize("1 + 2 + 3", limits)
