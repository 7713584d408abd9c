"""Error taxonomy shared by the tokenizer, converter and evaluator."""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kind of failure reported by a calculation stage."""

    NULL_INPUT = "NullInput"
    UNKNOWN_CHARACTER = "UnknownCharacter"
    TOO_MANY_TOKENS = "TooManyTokens"
    INVALID_TOKEN = "InvalidToken"
    UNMATCHED_BRACKET = "UnmatchedBracket"
    STACK_UNDERFLOW = "StackUnderflow"
    STACK_OVERFLOW = "StackOverflow"
    DOMAIN_ERROR = "DomainError"
    MALFORMED_EXPRESSION = "MalformedExpression"


class CalculatorError(ValueError):
    """
    Base class of every calculation error.

    Subclasses ValueError so callers that only care about "bad expression"
    can keep catching ValueError.

    :param str message: Human readable description
    :param str token: Offending token, when there is one
    """

    kind: ErrorKind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token


class NullInputError(CalculatorError):
    kind = ErrorKind.NULL_INPUT


class UnknownCharacterError(CalculatorError):
    kind = ErrorKind.UNKNOWN_CHARACTER

    def __init__(self, character: str, position: int):
        super().__init__(f"Unknown character {character!r} at position {position}", token=character)
        self.position = position


class TooManyTokensError(CalculatorError):
    kind = ErrorKind.TOO_MANY_TOKENS


class InvalidTokenError(CalculatorError):
    kind = ErrorKind.INVALID_TOKEN


class UnmatchedBracketError(CalculatorError):
    kind = ErrorKind.UNMATCHED_BRACKET


class StackUnderflowError(CalculatorError):
    kind = ErrorKind.STACK_UNDERFLOW


class StackOverflowError(CalculatorError):
    kind = ErrorKind.STACK_OVERFLOW


class DomainError(CalculatorError):
    kind = ErrorKind.DOMAIN_ERROR


class MalformedExpressionError(CalculatorError):
    kind = ErrorKind.MALFORMED_EXPRESSION
