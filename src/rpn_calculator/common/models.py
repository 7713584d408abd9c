"""Pydantic models for calculation requests and results."""
from typing import List

from pydantic import BaseModel, Field, field_validator

from rpn_calculator.common.settings import DEFAULT_LIMITS


class OperationRequest(BaseModel):
    """Represents a single expression submitted for evaluation."""

    expression: str = Field(
        ...,
        max_length=DEFAULT_LIMITS.max_expression_length,
        description="Infix expression as a string",
    )

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not blank."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class OperationResult(BaseModel):
    """Represents a successfully evaluated expression."""

    expression: str = Field(..., description="Original infix expression")
    postfix: List[str] = Field(default_factory=list, description="Expression tokens in RPN order")
    result: float = Field(..., description="Evaluated numeric result of the expression")


class OperationError(BaseModel):
    """Represents an expression that could not be evaluated."""

    expression: str = Field(..., description="Original infix expression")
    kind: str = Field(..., description="Error kind, e.g. 'UnmatchedBracket'")
    error: str = Field(..., description="Error message")
