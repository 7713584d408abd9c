"""Test classes OperationRequest, OperationResult and OperationError."""
from pydantic import ValidationError
import pytest

from rpn_calculator.common.models import OperationError, OperationRequest, OperationResult
from rpn_calculator.common.settings import DEFAULT_LIMITS, CalculatorLimits


def test_operation_request_valid() -> None:
    """Test that a valid OperationRequest can be created."""
    req = OperationRequest(expression="2 + 2 * 3")
    assert req.expression == "2 + 2 * 3"
    assert isinstance(req.expression, str)


def test_operation_request_invalid_type() -> None:
    """Test that non-string expressions raise a validation error."""
    with pytest.raises(ValidationError):
        # int instead of str
        OperationRequest(expression=123)


@pytest.mark.parametrize("expression", ["", "   "])
def test_operation_request_blank(expression: str) -> None:
    with pytest.raises(ValidationError):
        OperationRequest(expression=expression)


def test_operation_request_length_limit() -> None:
    """Expressions are limited to 999 characters."""
    OperationRequest(expression="1" * 999)
    with pytest.raises(ValidationError):
        OperationRequest(expression="1" * 1000)


def test_operation_result_valid() -> None:
    """Test that a valid OperationResult can be created."""
    res = OperationResult(expression="2 + 2 * 3", postfix=["2", "2", "3", "*", "+"], result=8.0)
    assert res.expression == "2 + 2 * 3"
    assert res.result == 8.0
    assert isinstance(res.result, float)


def test_operation_result_invalid_result_type() -> None:
    """Test that invalid result type raises a validation error."""
    with pytest.raises(ValidationError):
        OperationResult(expression="2 + 2", result="not a float")


def test_operation_error_dump() -> None:
    err = OperationError(expression="1 / 0", kind="DomainError", error="Division by zero")
    assert err.model_dump() == {"expression": "1 / 0", "kind": "DomainError", "error": "Division by zero"}


def test_default_limits() -> None:
    assert DEFAULT_LIMITS.max_expression_length == 999
    assert DEFAULT_LIMITS.max_tokens == 1000
    assert DEFAULT_LIMITS.max_token_length == 63
    assert DEFAULT_LIMITS.stack_capacity == 1000
    assert DEFAULT_LIMITS.strict_brackets is False


def test_limits_are_frozen_and_validated() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_LIMITS.max_tokens = 5
    with pytest.raises(ValidationError):
        CalculatorLimits(max_tokens=0)
