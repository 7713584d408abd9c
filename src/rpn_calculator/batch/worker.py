"""Worker process for evaluating a single expression."""
from multiprocessing.connection import Connection
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rpn_calculator.common.errors import CalculatorError
from rpn_calculator.common.logger import logger
from rpn_calculator.common.models import OperationError, OperationResult
from rpn_calculator.common.parser import ExpressionParser
from rpn_calculator.common.settings import DEFAULT_LIMITS

INTERNAL_ERROR_KIND = "InternalError"


class WorkerProcess(BaseModel):
    """
    Worker process responsible for evaluating a single expression.

    Lifecycle:
        - Spawned by the batch evaluator
        - Receives one expression only
        - Sends the computed result or error through a Pipe
        - Terminates immediately after computation
    """

    # Make the Pydantic instance immutable (read-only) for safety
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the evaluator")
    expression: str = Field(
        ...,
        max_length=DEFAULT_LIMITS.max_expression_length,
        description="Single infix expression to evaluate",
    )
    line_number: int = Field(..., ge=1, description="Line number in the input file")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def compute(self) -> Union[OperationResult, OperationError]:
        """
        Run the tokenize / convert / evaluate pipeline on the expression.

        :return: The result, or a description of the failure
        :rtype: Union[OperationResult, OperationError]
        """
        try:
            tokens: List[str] = ExpressionParser.tokenize(self.expression)
            postfix: List[str] = ExpressionParser.to_rpn(tokens)
            result: float = ExpressionParser.evaluate_rpn(postfix)
        except CalculatorError as exc:
            logger.error(
                f"👷❌ Worker failed on line {self.line_number}: {exc.kind.value}: {exc}\n"
                f"Invalid expression, could not evaluate: {self.expression!r}"
            )
            return OperationError(expression=self.expression, kind=exc.kind.value, error=str(exc))
        return OperationResult(expression=self.expression, postfix=postfix, result=result)

    def run(self) -> None:
        """
        Evaluate the expression and send the result or error through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        outcome: Union[OperationResult, OperationError, None] = None

        try:
            outcome = self.compute()
        except Exception as exc:
            logger.error(f"👷💥 Worker crashed on line {self.line_number}: {exc!r}")
            outcome = OperationError(expression=self.expression, kind=INTERNAL_ERROR_KIND, error=str(exc))

        try:
            payload: Dict[str, Any] = {"line": self.line_number, **outcome.model_dump()}
            self.conn.send(payload)
        finally:
            # Always close the connection
            self.conn.close()

        if isinstance(outcome, OperationResult):
            logger.info(f"👷✅ Worker finished on line {self.line_number}: {outcome.result}")
