"""
Command-line entrypoint.

This script either:
- Evaluates a single expression given as argument and prints the result
- Evaluates an expressions file, one expression per line, with worker processes

Examples
--------
rpn-calculator "sqrt(16) + 3!"
rpn-calculator --postfix "(3 + 4) * 2"
rpn-calculator --file resources/expressions.txt
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError, model_validator

from rpn_calculator.batch.runner import BatchEvaluator
from rpn_calculator.common.errors import CalculatorError
from rpn_calculator.common.models import OperationRequest
from rpn_calculator.common.parser import ExpressionParser


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : str, optional
        Expression to evaluate.
    file_path : FilePath, optional
        Path to a file containing one expression per line.
    postfix : bool
        Also print the postfix form of the expression.
    """

    expression: Optional[str] = None
    file_path: Optional[FilePath] = None
    postfix: bool = Field(default=False)

    @model_validator(mode="after")
    def exactly_one_source(self) -> "CliArgs":
        """Ensure either an expression or a file is given, not both."""
        if (self.expression is None) == (self.file_path is None):
            raise ValueError("Provide exactly one of an expression or --file")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="rpn-calculator",
        description="Evaluate infix expressions through Reverse Polish Notation",
    )

    parser.add_argument("expression", nargs="?", help="Infix expression, e.g. '2 ^ 3 ^ 2'")
    parser.add_argument("-f", "--file", dest="file_path", help="Path to a file with one expression per line")
    parser.add_argument("-p", "--postfix", action="store_true", help="Also print the postfix form")

    args = parser.parse_args(argv)

    try:
        return CliArgs(expression=args.expression, file_path=args.file_path, postfix=args.postfix)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path for an expressions file.

    Examples
    --------
    input: resources/expressions.txt
    output: resources/expressions_txt_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "_".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{input_path.stem}{suffix_safe}_results.txt")


def evaluate_expression(expression: str, show_postfix: bool) -> int:
    """
    Evaluate one expression and print the outcome.

    :return: Process exit status
    :rtype: int
    """
    try:
        request = OperationRequest(expression=expression)
    except ValidationError as exc:
        print(f"ERROR: InvalidRequest: {exc.errors()[0]['msg']}", file=sys.stderr)
        return 1

    try:
        tokens = ExpressionParser.tokenize(request.expression)
        rpn = ExpressionParser.to_rpn(tokens)
        result = ExpressionParser.evaluate_rpn(rpn)
    except CalculatorError as exc:
        print(f"ERROR: {exc.kind.value}: {exc}", file=sys.stderr)
        return 1

    if show_postfix:
        print(" ".join(rpn))
    print(result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function executed by the console script.
    """
    cli_args = parse_args(argv)

    if cli_args.file_path is None:
        return evaluate_expression(cli_args.expression, cli_args.postfix)

    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)
    evaluator = BatchEvaluator(output_file=output_path)
    count = evaluator.run(input_path)
    print(f"{count} expressions evaluated, results in {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
