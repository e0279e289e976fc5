"""Number and currency formatting used by the formatting functions.

Rules:
- Numbers never render in scientific notation.
- ``format_number`` truncates the fraction to ``maximum_fraction_digits``
  (no rounding), drops trailing zeros beyond ``minimum_fraction_digits`` and
  pads up to it.
- ``format_currency`` rounds to whole cents, half away from zero.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

# Upper bound for requested fraction digits
MAX_FRACTION_DIGITS = 100

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}


def to_decimal(value: int | float) -> Decimal:
    """Exact decimal for an int, shortest round-tripping decimal for a float."""
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(repr(value))


def to_plain_string(value: int | float) -> str:
    """
    Render a number as a plain decimal string.

    Examples:
        >>> to_plain_string(1e-7)
        '0.0000001'
        >>> to_plain_string(1e20)
        '100000000000000000000'
    """
    return format(to_decimal(value), "f")


def group_thousands(integer: str) -> str:
    """Insert ``,`` every three digits of an (optionally signed) integer string."""
    negative = integer.startswith("-")
    digits = (integer[1:] if negative else integer) or "0"
    head = len(digits) % 3 or 3
    groups = [digits[:head]] + [digits[i : i + 3] for i in range(head, len(digits), 3)]
    grouped = ",".join(groups)
    return f"-{grouped}" if negative else grouped


def is_finite(value: int | float) -> bool:
    """Ints are always finite; floats exclude NaN and infinities."""
    return not isinstance(value, float) or math.isfinite(value)


def format_number(
    value: int | float,
    minimum_fraction_digits: int = 0,
    maximum_fraction_digits: int = 3,
    use_grouping: bool = True,
) -> str:
    """
    Format a number for display.

    Args:
        value: Number to format
        minimum_fraction_digits: Fraction digits always shown (zero padded)
        maximum_fraction_digits: Fraction digits kept (extra digits truncated)
        use_grouping: Separate thousands with ``,``

    Returns:
        Formatted string, or ``""`` for NaN and infinities

    Examples:
        >>> format_number(1234.5, maximum_fraction_digits=0)
        '1,234'
        >>> format_number(5, minimum_fraction_digits=2, maximum_fraction_digits=2)
        '5.00'
    """
    if not is_finite(value):
        return ""

    minimum = min(max(0, minimum_fraction_digits), MAX_FRACTION_DIGITS)
    maximum = min(max(minimum, maximum_fraction_digits), MAX_FRACTION_DIGITS)

    if maximum == 0 and (isinstance(value, int) or value.is_integer()):
        integer = to_plain_string(value).partition(".")[0]
        if integer == "-0":
            integer = "0"
        return group_thousands(integer) if use_grouping else integer

    integer, _, fraction = to_plain_string(value).partition(".")
    fraction = fraction[:maximum].rstrip("0").ljust(minimum, "0")

    if integer == "-0" and not fraction.strip("0"):
        integer = "0"
    if use_grouping:
        integer = group_thousands(integer)

    return f"{integer}.{fraction}" if fraction else integer


def format_currency(value: int | float, currency: str = "USD") -> str:
    """
    Format a monetary amount with a symbol and two-digit cents.

    Unknown currency codes are printed as-is in place of a symbol.

    Examples:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(19.999, "EUR")
        '€20.00'
    """
    if not is_finite(value):
        return ""

    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency)
    amount = to_decimal(value)
    with localcontext() as ctx:
        # Exact arithmetic for any magnitude
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + abs(amount.as_tuple().exponent) + 3)
        cents = (amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        whole, remainder = divmod(abs(cents), 100)
    sign = "-" if cents < 0 else ""
    return f"{sign}{symbol}{group_thousands(format(whole, 'f'))}.{int(remainder):02d}"


__all__ = [
    "CURRENCY_SYMBOLS",
    "to_decimal",
    "to_plain_string",
    "group_thousands",
    "is_finite",
    "format_number",
    "format_currency",
]
