"""
Function Evaluator
Evaluates the standard catalog functions referenced by function-call values.

Catalog:
- Validation: required, regex, length, numeric, email
- Logic: and, or, not
- Formatting: formatString, formatNumber, formatCurrency, formatDate, pluralize
- Actions: openUrl (evaluates to None, handled by the caller)

Bad input never raises: a missing or mistyped argument yields the documented
falsy or empty result.
"""

import math
import re
from functools import lru_cache
from typing import Any, Callable

from ..core.cache import LRUCache
from ..core.config import Settings, get_settings
from ..core.logging_config import get_logger
from ..data.context import DataContext
from ..data.path import MISSING
from .formatting import format_currency, format_number, is_finite, to_plain_string

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")

ACTION_FUNCTIONS = frozenset({"openUrl"})

Args = dict[str, Any]
Handler = Callable[[Args, DataContext, int], Any]


# ============================================================================
# Narrowing
# ============================================================================


def _is_primitive(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def number_text(value: int | float) -> str:
    """Text form of a number: ``5`` stays ``"5"``, ``2.5`` becomes ``"2.5"``."""
    return to_plain_string(value) if isinstance(value, int) else repr(value)


def as_string(value: Any) -> str | None:
    """Narrow to string; numbers and booleans are stringified."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return number_text(value)
    return None


def as_number(value: Any) -> int | float | None:
    """Narrow to a finite number; numeric strings are parsed."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if is_finite(value) else None
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def as_boolean(value: Any) -> bool | None:
    """Narrow to boolean; the strings ``"true"``/``"false"`` are accepted."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


# ============================================================================
# Evaluator
# ============================================================================


class FunctionEvaluator:
    """
    Evaluates function calls against a data context.

    Examples:
        >>> from a2ui_core.data import DataStore
        >>> evaluator = FunctionEvaluator()
        >>> store = DataStore({"user": {"name": "Ada"}})
        >>> evaluator.evaluate("formatString", {"template": "Hi ${/user/name}"}, store)
        'Hi Ada'
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """
        Initialize evaluator.

        Args:
            settings: Limits and cache sizes (defaults to process settings)
        """
        settings = settings or get_settings()
        self.max_call_depth = settings.max_call_depth
        self._patterns: LRUCache[re.Pattern[str]] = LRUCache(max_size=settings.regex_cache_size)
        self._functions: dict[str, Handler] = {
            "required": self._required,
            "regex": self._regex,
            "length": self._length,
            "numeric": self._numeric,
            "email": self._email,
            "and": self._and,
            "or": self._or,
            "not": self._not,
            "formatString": self._format_string,
            "formatNumber": self._format_number,
            "formatCurrency": self._format_currency,
            "formatDate": self._format_date,
            "pluralize": self._pluralize,
        }

    @property
    def functions(self) -> frozenset[str]:
        """Names of the value-returning functions."""
        return frozenset(self._functions)

    @staticmethod
    def is_action(call: str) -> bool:
        """True for action functions, which produce no value."""
        return call in ACTION_FUNCTIONS

    # Public API

    def evaluate(self, call: str, args: Args | None, context: DataContext) -> Any:
        """
        Evaluate a function call.

        Args:
            call: Function name
            args: Arguments; values are literals or ``{"path": ...}`` references
            context: Context that path references resolve against

        Returns:
            Function result, or None for actions and unknown functions
        """
        return self._evaluate(call, args, context, 0)

    def evaluate_boolean(self, call: str, args: Args | None, context: DataContext) -> bool | None:
        """Evaluate and narrow the result to a boolean."""
        result = self.evaluate(call, args, context)
        return result if isinstance(result, bool) else None

    def evaluate_string(self, call: str, args: Args | None, context: DataContext) -> str | None:
        """Evaluate and narrow the result to a string."""
        return as_string(self.evaluate(call, args, context))

    def resolve_value(self, element: Any, context: DataContext) -> Any:
        """
        Resolve a dynamic property value.

        ``{"call": ..., "args": ...}`` is evaluated, ``{"path": ...}`` is read
        from the context, anything else is returned as a literal.
        """
        if isinstance(element, dict):
            if "call" in element:
                call = element["call"]
                if not isinstance(call, str):
                    return None
                return self.evaluate(call, element.get("args"), context)
            if "path" in element:
                path = element["path"]
                return context.get(path) if isinstance(path, str) else None
        return element

    def resolve_string(self, element: Any, context: DataContext) -> str | None:
        return as_string(self.resolve_value(element, context))

    def resolve_number(self, element: Any, context: DataContext) -> int | float | None:
        return as_number(self.resolve_value(element, context))

    def resolve_boolean(self, element: Any, context: DataContext) -> bool | None:
        return as_boolean(self.resolve_value(element, context))

    # Dispatch

    def _evaluate(self, call: str, args: Any, context: DataContext, depth: int) -> Any:
        handler = self._functions.get(call)
        if handler is None:
            if call not in ACTION_FUNCTIONS:
                logger.info("unknown_function", call=call)
            return None
        return handler(args if isinstance(args, dict) else {}, context, depth)

    def _condition(self, element: Any, context: DataContext, depth: int) -> bool:
        """Truth value of a logic operand: a literal boolean or a nested call."""
        if not isinstance(element, dict):
            return as_boolean(element) or False
        call = element.get("call")
        if not isinstance(call, str):
            return False
        if depth >= self.max_call_depth:
            logger.warning("call_depth_exceeded", call=call, max_depth=self.max_call_depth)
            return False
        return self._evaluate(call, element.get("args"), context, depth + 1) is True

    # Argument resolution

    def _arg(self, args: Args, name: str, context: DataContext) -> Any:
        """Resolved argument value, or MISSING."""
        element = args.get(name, MISSING)
        if isinstance(element, dict) and "path" in element:
            path = element["path"]
            if not isinstance(path, str):
                return MISSING
            value = context.get(path, MISSING)
            return value if _is_primitive(value) else MISSING
        return MISSING if element is None else element

    def _string(self, args: Args, name: str, context: DataContext) -> str | None:
        return as_string(self._arg(args, name, context))

    def _number(self, args: Args, name: str, context: DataContext) -> int | float | None:
        return as_number(self._arg(args, name, context))

    def _boolean(self, args: Args, name: str, context: DataContext) -> bool | None:
        return as_boolean(self._arg(args, name, context))

    def _compile(self, pattern: str) -> re.Pattern[str]:
        return self._patterns.get_or_set(pattern, lambda: re.compile(pattern))

    # Validation

    def _required(self, args: Args, context: DataContext, depth: int) -> bool:
        value = self._arg(args, "value", context)
        if value is MISSING:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        return True

    def _regex(self, args: Args, context: DataContext, depth: int) -> bool:
        value = self._string(args, "value", context)
        pattern = self._string(args, "pattern", context)
        if value is None or pattern is None:
            return False
        try:
            compiled = self._compile(pattern)
        except re.error as e:
            logger.debug("invalid_pattern", pattern=pattern, error=str(e))
            return False
        return compiled.fullmatch(value) is not None

    def _length(self, args: Args, context: DataContext, depth: int) -> bool:
        value = self._string(args, "value", context)
        if value is None:
            return False
        minimum = self._number(args, "min", context)
        maximum = self._number(args, "max", context)
        size = len(value)
        return (minimum is None or size >= int(minimum)) and (maximum is None or size <= int(maximum))

    def _numeric(self, args: Args, context: DataContext, depth: int) -> bool:
        value = self._number(args, "value", context)
        if value is None:
            return False
        minimum = self._number(args, "min", context)
        maximum = self._number(args, "max", context)
        return (minimum is None or value >= minimum) and (maximum is None or value <= maximum)

    def _email(self, args: Args, context: DataContext, depth: int) -> bool:
        value = self._string(args, "value", context)
        return value is not None and EMAIL_PATTERN.fullmatch(value) is not None

    # Logic

    def _and(self, args: Args, context: DataContext, depth: int) -> bool:
        conditions = args.get("conditions")
        if not isinstance(conditions, list):
            return False
        return all(self._condition(item, context, depth) for item in conditions)

    def _or(self, args: Args, context: DataContext, depth: int) -> bool:
        conditions = args.get("conditions")
        if not isinstance(conditions, list):
            return False
        return any(self._condition(item, context, depth) for item in conditions)

    def _not(self, args: Args, context: DataContext, depth: int) -> bool:
        return not self._condition(args.get("condition"), context, depth)

    # Formatting

    def _format_string(self, args: Args, context: DataContext, depth: int) -> str:
        template = self._string(args, "template", context)
        if template is None:
            return ""

        def substitute(match: re.Match[str]) -> str:
            path = match.group(1).strip()
            value = context.get(path)
            return as_string(value) if _is_primitive(value) else ""

        return PLACEHOLDER_PATTERN.sub(substitute, template)

    def _format_number(self, args: Args, context: DataContext, depth: int) -> str:
        value = self._number(args, "value", context)
        if value is None:
            return ""
        minimum = self._number(args, "minimumFractionDigits", context)
        maximum = self._number(args, "maximumFractionDigits", context)
        grouping = self._boolean(args, "useGrouping", context)
        return format_number(
            value,
            minimum_fraction_digits=0 if minimum is None else int(minimum),
            maximum_fraction_digits=3 if maximum is None else int(maximum),
            use_grouping=True if grouping is None else grouping,
        )

    def _format_currency(self, args: Args, context: DataContext, depth: int) -> str:
        value = self._number(args, "value", context)
        if value is None:
            return ""
        currency = self._string(args, "currency", context) or "USD"
        return format_currency(value, currency)

    def _format_date(self, args: Args, context: DataContext, depth: int) -> str:
        # Pattern-based date formatting is not supported; the value passes through
        return self._string(args, "value", context) or ""

    def _pluralize(self, args: Args, context: DataContext, depth: int) -> str:
        count = self._number(args, "count", context)
        count = 0 if count is None else int(count)
        zero = self._string(args, "zero", context)
        one = self._string(args, "one", context)
        if count == 0 and zero is not None:
            return zero
        if count == 1 and one is not None:
            return one
        return self._string(args, "other", context) or ""


# ============================================================================
# Module-level helpers
# ============================================================================


@lru_cache(maxsize=1)
def get_evaluator() -> FunctionEvaluator:
    """Shared evaluator built from process settings."""
    return FunctionEvaluator()


def evaluate(call: str, args: Args | None, context: DataContext) -> Any:
    """Evaluate with the shared evaluator."""
    return get_evaluator().evaluate(call, args, context)


def evaluate_boolean(call: str, args: Args | None, context: DataContext) -> bool | None:
    return get_evaluator().evaluate_boolean(call, args, context)


def evaluate_string(call: str, args: Args | None, context: DataContext) -> str | None:
    return get_evaluator().evaluate_string(call, args, context)


def is_action(call: str) -> bool:
    return FunctionEvaluator.is_action(call)


__all__ = [
    "FunctionEvaluator",
    "ACTION_FUNCTIONS",
    "EMAIL_PATTERN",
    "as_string",
    "as_number",
    "as_boolean",
    "number_text",
    "get_evaluator",
    "evaluate",
    "evaluate_boolean",
    "evaluate_string",
    "is_action",
]
