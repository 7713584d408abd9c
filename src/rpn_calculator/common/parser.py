"""Parse and evaluate infix expressions through the RPN pipeline."""
from typing import List

from rpn_calculator.common import converter, evaluator, tokenizer
from rpn_calculator.common.errors import MalformedExpressionError
from rpn_calculator.common.settings import DEFAULT_LIMITS, CalculatorLimits
from rpn_calculator.common.symbols import is_number_token


class ExpressionParser:
    """
    Parse and evaluate mathematical expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Every call owns its stacks, nothing is shared between calls

    Algorithm:
        1. Tokenize the infix text
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack

    Examples:
        - Infix expression (standard notation): sqrt(16) + 3!
        - Corresponding Reverse Polish Notation (RPN): 16 sqrt 3 ! +

    """

    @staticmethod
    def tokenize(expr: str, limits: CalculatorLimits = DEFAULT_LIMITS) -> List[str]:
        """
        Split a mathematical expression into tokens.

        :param str expr: Infix expression

        :return: List of tokens
        :rtype: List[str]
        """
        return tokenizer.tokenize(expr, limits)

    @staticmethod
    def _is_number(token: str) -> bool:
        """
        Determine if a token represents a numeric value.

        :param str token: Token string

        :return: True if the token starts like a number, else False
        :rtype: bool
        """
        return is_number_token(token)

    @staticmethod
    def to_rpn(tokens: List[str], limits: CalculatorLimits = DEFAULT_LIMITS) -> List[str]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN).

        :param List[str] tokens: List of infix tokens

        :return: List of tokens in RPN order
        :rtype: List[str]
        """
        return converter.convert(tokens, limits=limits)

    @staticmethod
    def evaluate_rpn(rpn: List[str], limits: CalculatorLimits = DEFAULT_LIMITS) -> float:
        """
        Evaluate a list of tokens in RPN order.

        :param List[str] rpn: Postfix tokens

        :return: Computed result as float
        :rtype: float
        """
        return evaluator.evaluate(rpn, limits=limits)

    @staticmethod
    def evaluate(expr: str, limits: CalculatorLimits = DEFAULT_LIMITS) -> float:
        """
        Evaluate an infix expression.

        :param str expr: Infix expression string

        :return: Computed result as float
        :rtype: float
        :raises CalculatorError: If the expression is invalid or cannot be computed
        """
        tokens: List[str] = ExpressionParser.tokenize(expr, limits)

        if not tokens:
            raise MalformedExpressionError("Empty expression")

        rpn: List[str] = ExpressionParser.to_rpn(tokens, limits)
        return ExpressionParser.evaluate_rpn(rpn, limits)
