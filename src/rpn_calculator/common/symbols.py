"""Read-only symbol tables: operators, functions and brackets."""
import string
from enum import Enum
from typing import Dict, Optional, Tuple

from rpn_calculator.common.errors import InvalidTokenError, NullInputError


class OperatorId(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    FACT = "!"


class FunctionId(Enum):
    SQRT = "sqrt"
    LOG = "log"
    LN = "ln"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    COSH = "cosh"
    SINH = "sinh"
    TANH = "tanh"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    ARCSIN = "arcsin"
    ARCCOS = "arccos"
    ARCTAN = "arctan"


class BracketKind(Enum):
    PARENTHESES = ("(", ")")
    BRACKETS = ("[", "]")
    BRACES = ("{", "}")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


# Precedence ranks, 1 binds tightest
FUNCTION_PRECEDENCE = 1

OPERATOR_PRECEDENCE: Dict[OperatorId, int] = {
    OperatorId.FACT: 2,
    OperatorId.POW: 3,
    OperatorId.MUL: 4,
    OperatorId.DIV: 4,
    OperatorId.ADD: 5,
    OperatorId.SUB: 5,
}

RIGHT_ASSOCIATIVE = frozenset({OperatorId.POW.value, OperatorId.FACT.value})

_OPERATORS_BY_GLYPH: Dict[str, OperatorId] = {op.value: op for op in OperatorId}
_FUNCTIONS_BY_NAME: Dict[str, FunctionId] = {func.value: func for func in FunctionId}
_OPEN_BRACKETS: Dict[str, BracketKind] = {kind.open: kind for kind in BracketKind}
_CLOSE_BRACKETS: Dict[str, BracketKind] = {kind.close: kind for kind in BracketKind}

# Every character that forms a token on its own
SINGLE_CHAR_TOKENS: Tuple[str, ...] = tuple(_OPERATORS_BY_GLYPH) + tuple(_OPEN_BRACKETS) + tuple(_CLOSE_BRACKETS)


def classify_operator(text: Optional[str]) -> Optional[OperatorId]:
    """
    Look up an operator by its glyph.

    :param str text: Token text

    :return: The operator, or None when text is not an operator
    :rtype: Optional[OperatorId]
    """
    if text is None:
        return None
    return _OPERATORS_BY_GLYPH.get(text)


def classify_function(text: Optional[str]) -> Optional[FunctionId]:
    """
    Look up a function by its (lowercase) name.

    :param str text: Token text

    :return: The function, or None when text is not a known function
    :rtype: Optional[FunctionId]
    """
    if text is None:
        return None
    return _FUNCTIONS_BY_NAME.get(text)


def precedence_of(text: Optional[str]) -> int:
    """
    Return the precedence rank of a function or operator token.

    :param str text: Token text

    :return: Rank between 1 (highest) and 5 (lowest)
    :rtype: int
    :raises NullInputError: If text is None
    :raises InvalidTokenError: If text is neither a function nor an operator
    """
    if text is None:
        raise NullInputError("Cannot compute the precedence of a missing token")
    if classify_function(text) is not None:
        return FUNCTION_PRECEDENCE
    operator_id = classify_operator(text)
    if operator_id is None:
        raise InvalidTokenError(f"Token has no precedence: {text!r}", token=text)
    return OPERATOR_PRECEDENCE[operator_id]


def is_right_associative(text: Optional[str]) -> bool:
    """
    Tell whether a token groups right to left.

    Anything that is not '^' or '!' is reported as left-associative,
    including text that is not an operator at all.

    :raises NullInputError: If text is None or empty
    """
    if not text:
        raise NullInputError("Cannot compute the associativity of a missing token")
    return text in RIGHT_ASSOCIATIVE


def is_number_token(text: str) -> bool:
    """A number starts with a digit, or with '.' followed by a digit."""
    if not text:
        return False
    if text[0] in string.digits:
        return True
    return text[0] == "." and len(text) > 1 and text[1] in string.digits


def bracket_kind(text: str) -> Optional[BracketKind]:
    return _OPEN_BRACKETS.get(text) or _CLOSE_BRACKETS.get(text)


def is_open_bracket(text: str) -> bool:
    return text in _OPEN_BRACKETS


def is_close_bracket(text: str) -> bool:
    return text in _CLOSE_BRACKETS
