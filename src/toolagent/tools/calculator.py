"""Calculator tool: evaluates basic arithmetic with the restricted evaluator."""

from __future__ import annotations

from pydantic import BaseModel, Field

from toolagent.toolkit.base import BaseTool
from toolagent.tools.expression import evaluate_expression, format_number


class CalculatorArgs(BaseModel):
    expression: str = Field(
        description="要计算的数学表达式，例如: '(15 + 25) * 2'"
    )


class Calculator(BaseTool):
    """Evaluates ``expression`` and reports ``"<expression> = <result>"``.

    Evaluation failures raise ``EvaluationError``, which the registry turns
    into a failure result for the model.
    """

    name = "calculator"
    description = "执行数学运算，支持基础的加减乘除运算"
    args_model = CalculatorArgs

    def call(self, args: CalculatorArgs) -> str:
        result = evaluate_expression(args.expression)
        return f"{args.expression} = {format_number(result)}"
