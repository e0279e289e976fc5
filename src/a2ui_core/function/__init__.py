"""Standard catalog function evaluation."""

from .evaluator import (
    FunctionEvaluator,
    ACTION_FUNCTIONS,
    as_string,
    as_number,
    as_boolean,
    get_evaluator,
    evaluate,
    evaluate_boolean,
    evaluate_string,
    is_action,
)
from .formatting import format_number, format_currency

__all__ = [
    "FunctionEvaluator",
    "ACTION_FUNCTIONS",
    "as_string",
    "as_number",
    "as_boolean",
    "get_evaluator",
    "evaluate",
    "evaluate_boolean",
    "evaluate_string",
    "is_action",
    "format_number",
    "format_currency",
]
