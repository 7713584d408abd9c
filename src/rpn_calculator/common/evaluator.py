"""Evaluate postfix (RPN) token sequences."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, Dict, Optional, Sequence

from rpn_calculator.common.converter import select_tokens
from rpn_calculator.common.errors import (
    DomainError,
    InvalidTokenError,
    MalformedExpressionError,
    StackUnderflowError,
)
from rpn_calculator.common.logger import logger
from rpn_calculator.common.settings import DEFAULT_LIMITS, CalculatorLimits
from rpn_calculator.common.stack import ValueStack
from rpn_calculator.common.symbols import FunctionId, OperatorId, classify_function, classify_operator, is_number_token


# Type aliases for binary operators and unary functions
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]
FunctionFn: ABCCallable[[float], float] = Callable[[float], float]

UNARY_FUNCTIONS: Dict[FunctionId, FunctionFn] = {
    FunctionId.SQRT: math.sqrt,
    FunctionId.LOG: math.log10,
    FunctionId.LN: math.log,
    FunctionId.SIN: math.sin,
    FunctionId.COS: math.cos,
    FunctionId.TAN: math.tan,
    FunctionId.COSH: math.cosh,
    FunctionId.SINH: math.sinh,
    FunctionId.TANH: math.tanh,
    FunctionId.ASIN: math.asin,
    FunctionId.ACOS: math.acos,
    FunctionId.ATAN: math.atan,
    FunctionId.ARCSIN: math.asin,
    FunctionId.ARCCOS: math.acos,
    FunctionId.ARCTAN: math.atan,
}


def factorial(number: int) -> float:
    """
    Compute number! as a float by repeated multiplication.

    0! and 1! are 1. Once the product overflows it stays at inf.

    :param int number: Non-negative integer
    :return: number!
    :rtype: float
    :raises DomainError: If number is negative
    """
    if number < 0:
        raise DomainError(f"Factorial of a negative number: {number}")
    result = 1.0
    for factor in range(2, number + 1):
        result *= factor
        if math.isinf(result):
            break
    return result


LOGARITHMS = frozenset({FunctionId.LOG, FunctionId.LN})


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and value % 2 == 1


def _power(a: float, b: float) -> float:
    """
    pow(a, b) with the IEEE results math.pow raises on.

    A zero base with a negative exponent is a pole (inf, signed like the base
    for odd integer exponents); overflow keeps the sign of the exact result.
    """
    odd_exponent = _is_odd_integer(b)
    if a == 0.0 and b < 0.0:
        logger.warning(f"^({a}, {b}) is a pole, result is inf")
        return math.copysign(math.inf, a) if odd_exponent else math.inf
    try:
        return math.pow(a, b)
    except ValueError:
        logger.warning(f"^({a}, {b}) is outside the function domain, result is nan")
        return math.nan
    except OverflowError:
        logger.warning(f"^({a}, {b}) overflows, result is inf")
        return math.copysign(math.inf, a) if odd_exponent else math.inf


def _call_function(function_id: FunctionId, x: float) -> float:
    """
    Apply a unary function with the IEEE results math raises on.

    log and ln of zero are -inf, overflow keeps the sign of the exact result,
    any other domain error is nan.
    """
    name = function_id.value
    if function_id in LOGARITHMS and x == 0.0:
        logger.warning(f"{name}({x}) is a pole, result is -inf")
        return -math.inf
    try:
        return UNARY_FUNCTIONS[function_id](x)
    except ValueError:
        logger.warning(f"{name}({x}) is outside the function domain, result is nan")
        return math.nan
    except OverflowError:
        logger.warning(f"{name}({x}) overflows, result is inf")
        # cosh is even, the other overflowing primitives are odd
        return math.inf if function_id is FunctionId.COSH else math.copysign(math.inf, x)


BINARY_OPERATIONS: Dict[OperatorId, OperatorFn] = {
    OperatorId.ADD: operator.add,
    OperatorId.SUB: operator.sub,
    OperatorId.MUL: operator.mul,
    OperatorId.DIV: operator.truediv,
    OperatorId.POW: _power,
}


def parse_number(token: str) -> float:
    """
    Parse a number token.

    :raises InvalidTokenError: If the token is not a well-formed decimal (e.g. "1.2.3")
    """
    try:
        return float(token)
    except ValueError:
        raise InvalidTokenError(f"Malformed number: {token!r}", token=token) from None


def _apply_factorial(stack: ValueStack, token: str) -> None:
    if stack.is_empty():
        raise StackUnderflowError(f"Operator {token!r} needs one operand", token=token)
    operand = stack.pop()
    if not math.isfinite(operand) or operand < 0.0 or operand != int(operand):
        raise DomainError(f"Factorial is only defined for non-negative integers, got {operand}", token=token)
    stack.push(factorial(int(operand)))


def _apply_binary(stack: ValueStack, operator_id: OperatorId, token: str) -> None:
    if len(stack) < 2:
        raise StackUnderflowError(f"Operator {token!r} needs two operands", token=token)
    # b was pushed last, it is the right-hand operand
    b = stack.pop()
    a = stack.pop()
    if operator_id is OperatorId.DIV and b == 0.0:
        raise DomainError(f"Division by zero: {a} / {b}", token=token)
    stack.push(BINARY_OPERATIONS[operator_id](a, b))


def _apply_function(stack: ValueStack, function_id: FunctionId, token: str) -> None:
    if stack.is_empty():
        raise StackUnderflowError(f"Function {token!r} needs one argument", token=token)
    stack.push(_call_function(function_id, stack.pop()))


def evaluate(
    postfix: Optional[Sequence[str]],
    length: Optional[int] = None,
    limits: CalculatorLimits = DEFAULT_LIMITS,
) -> float:
    """
    Evaluate a postfix token sequence using a stack.

    :param Sequence[str] postfix: Tokens in RPN order
    :param int length: Number of leading tokens to evaluate, all of them by default
    :param CalculatorLimits limits: Capacity limits

    :return: Computed result
    :rtype: float
    :raises StackUnderflowError: If an operator or function lacks operands
    :raises DomainError: On factorial of a negative or non-integer value, or division by zero
    :raises InvalidTokenError: On an unknown token or a malformed number
    :raises MalformedExpressionError: If evaluation leaves other than exactly one value
    """
    tokens = select_tokens(postfix, length, limits)
    stack = ValueStack(capacity=limits.stack_capacity)

    try:
        for token in tokens:
            if is_number_token(token):
                stack.push(parse_number(token))
                continue

            operator_id = classify_operator(token)
            if operator_id is OperatorId.FACT:
                _apply_factorial(stack, token)
                continue
            if operator_id is not None:
                _apply_binary(stack, operator_id, token)
                continue

            function_id = classify_function(token)
            if function_id is not None:
                _apply_function(stack, function_id, token)
                continue

            raise InvalidTokenError(f"Unknown token: {token!r}", token=token)

        if len(stack) != 1:
            raise MalformedExpressionError(
                f"Invalid expression ({len(stack)} values left on the stack, expected 1)"
            )
        result: float = stack.pop()
    finally:
        stack.clear()

    logger.debug(f"result={result}")
    return result
