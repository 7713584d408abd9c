"""Infix to postfix conversion (Shunting-yard)."""
from typing import List, Optional, Sequence

from rpn_calculator.common.errors import (
    InvalidTokenError,
    NullInputError,
    TooManyTokensError,
    UnmatchedBracketError,
)
from rpn_calculator.common.logger import logger
from rpn_calculator.common.settings import DEFAULT_LIMITS, CalculatorLimits
from rpn_calculator.common.stack import TokenStack
from rpn_calculator.common.symbols import (
    bracket_kind,
    classify_function,
    classify_operator,
    is_close_bracket,
    is_number_token,
    is_open_bracket,
    is_right_associative,
    precedence_of,
)


def select_tokens(tokens: Optional[Sequence[str]], length: Optional[int], limits: CalculatorLimits) -> Sequence[str]:
    """
    Return the first ``length`` tokens of a sequence after checking its bounds.

    :raises NullInputError: If tokens is None or length does not fit the sequence
    :raises TooManyTokensError: If the selection exceeds ``limits.max_tokens``
    """
    if tokens is None:
        raise NullInputError("Token sequence is missing")
    if length is None:
        length = len(tokens)
    if length < 0 or length > len(tokens):
        raise NullInputError(f"Length {length} does not fit a sequence of {len(tokens)} tokens")
    if length > limits.max_tokens:
        raise TooManyTokensError(f"Sequence has more than {limits.max_tokens} tokens")
    return tokens[:length]


def _should_pop(top: str, token: str) -> bool:
    """Decide whether the operator on the stack top binds before the incoming operator."""
    if classify_function(top) is not None:
        return True
    if classify_operator(top) is None:
        # Open bracket
        return False
    top_precedence = precedence_of(top)
    token_precedence = precedence_of(token)
    # Lower rank binds tighter
    if top_precedence < token_precedence:
        return True
    return top_precedence == token_precedence and not is_right_associative(token)


def _close_group(stack: TokenStack, output: List[str], close: str, limits: CalculatorLimits) -> None:
    """Pop operators up to the matching open bracket, then apply a pending function."""
    while not stack.is_empty() and not is_open_bracket(stack.peek()):
        output.append(stack.pop())
    if stack.is_empty():
        raise UnmatchedBracketError(f"Closing bracket {close!r} has no matching opening bracket", token=close)

    opening = stack.pop()
    if limits.strict_brackets and bracket_kind(opening) is not bracket_kind(close):
        raise UnmatchedBracketError(f"Bracket {opening!r} closed by {close!r}", token=close)

    if not stack.is_empty() and classify_function(stack.peek()) is not None:
        output.append(stack.pop())


def convert(
    tokens: Optional[Sequence[str]],
    length: Optional[int] = None,
    limits: CalculatorLimits = DEFAULT_LIMITS,
) -> List[str]:
    """
    Convert infix tokens into Reverse Polish Notation using the Shunting-yard algorithm.

    Numbers go straight to the output, functions and open brackets wait on an
    operator stack, a closing bracket flushes its group, and operators flush
    whatever binds at least as tightly before waiting themselves.

    Examples:
        - ["3", "+", "4", "*", "2"] -> ["3", "4", "2", "*", "+"]
        - ["2", "^", "3", "^", "2"] -> ["2", "3", "2", "^", "^"]

    :param Sequence[str] tokens: Infix tokens
    :param int length: Number of leading tokens to convert, all of them by default
    :param CalculatorLimits limits: Capacity limits

    :return: Tokens in postfix order
    :rtype: List[str]
    :raises NullInputError: If tokens is None or length is out of range
    :raises TooManyTokensError: If more than ``limits.max_tokens`` tokens are given
    :raises InvalidTokenError: On a token that is not a number, operator, function or bracket
    :raises UnmatchedBracketError: On a closing bracket without an opening one, or the reverse
    """
    infix = select_tokens(tokens, length, limits)
    output: List[str] = []
    stack = TokenStack(capacity=limits.stack_capacity, max_token_length=limits.max_token_length)

    try:
        for token in infix:
            if is_number_token(token):
                output.append(token)
            elif classify_function(token) is not None or is_open_bracket(token):
                stack.push(token)
            elif is_close_bracket(token):
                _close_group(stack, output, token, limits)
            elif classify_operator(token) is not None:
                while not stack.is_empty() and _should_pop(stack.peek(), token):
                    output.append(stack.pop())
                stack.push(token)
            else:
                raise InvalidTokenError(f"Unknown token: {token!r}", token=token)

        # Append remaining operators, stack top first
        while not stack.is_empty():
            top = stack.pop()
            if is_open_bracket(top):
                raise UnmatchedBracketError(f"Opening bracket {top!r} is never closed", token=top)
            output.append(top)
    finally:
        stack.clear()

    logger.debug(f"postfix={output}")
    return output
