"""Capacity limits of the calculation pipeline."""
from pydantic import BaseModel, ConfigDict, Field


class CalculatorLimits(BaseModel):
    """
    Bounds applied by the tokenizer, converter and evaluator.

    Oversized input is rejected rather than grown into.
    """

    # Limits are shared by every call, so they must never change after creation
    model_config = ConfigDict(frozen=True)

    max_expression_length: int = Field(default=999, ge=1, description="Maximum characters per expression")
    max_tokens: int = Field(default=1000, ge=1, description="Maximum tokens per token sequence")
    max_token_length: int = Field(default=63, ge=1, description="Maximum characters per token")
    stack_capacity: int = Field(default=1000, ge=1, description="Maximum entries per internal stack")
    strict_brackets: bool = Field(
        default=False,
        description="Require a close bracket to match the kind of its open bracket",
    )


DEFAULT_LIMITS = CalculatorLimits()
