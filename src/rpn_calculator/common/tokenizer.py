"""Split an infix expression into tokens."""
import string
from typing import List, Optional

from rpn_calculator.common.errors import NullInputError, TooManyTokensError, UnknownCharacterError
from rpn_calculator.common.logger import logger
from rpn_calculator.common.settings import DEFAULT_LIMITS, CalculatorLimits
from rpn_calculator.common.symbols import SINGLE_CHAR_TOKENS

NUMBER_CHARS = frozenset(string.digits + ".")
LETTERS = frozenset(string.ascii_letters)


def tokenize(expression: Optional[str], limits: CalculatorLimits = DEFAULT_LIMITS) -> List[str]:
    """
    Scan an expression left to right and split it into tokens.

    Tokens are:
        - runs of digits and dots (numbers, not validated here)
        - runs of letters (function names, not validated here)
        - single operator or bracket characters

    Whitespace separates tokens but is not required ("2*(3+4)" works).
    A run longer than ``limits.max_token_length`` continues in a new token.

    Examples:
        - "sqrt(16) + 2" -> ["sqrt", "(", "16", ")", "+", "2"]

    :param str expression: Infix expression
    :param CalculatorLimits limits: Capacity limits

    :return: List of tokens, in reading order
    :rtype: List[str]
    :raises NullInputError: If expression is None
    :raises UnknownCharacterError: On a character outside the accepted alphabet
    :raises TooManyTokensError: If more than ``limits.max_tokens`` tokens are produced
    """
    if expression is None:
        raise NullInputError("Expression is missing")

    tokens: List[str] = []

    def emit(token: str) -> None:
        if len(tokens) >= limits.max_tokens:
            raise TooManyTokensError(f"Expression has more than {limits.max_tokens} tokens")
        tokens.append(token)

    position = 0
    length = len(expression)
    while position < length:
        char = expression[position]

        if char.isspace():
            position += 1
            continue

        if char in NUMBER_CHARS or char in LETTERS:
            # Same-class run: digits/dots or letters
            run_chars = NUMBER_CHARS if char in NUMBER_CHARS else LETTERS
            end = position
            while (
                end < length
                and expression[end] in run_chars
                and end - position < limits.max_token_length
            ):
                end += 1
            emit(expression[position:end])
            position = end
            continue

        if char in SINGLE_CHAR_TOKENS:
            emit(char)
            position += 1
            continue

        raise UnknownCharacterError(char, position)

    logger.debug(f"tokens={tokens}")
    return tokens
