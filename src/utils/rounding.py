"""
Rounding helpers.

Display rounding is round-half-up (ties away from zero), computed in
Decimal over the shortest repr of the float so that values such as 0.145
round the way they read rather than the way they are stored in binary.
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP

# Wide enough to quantize any finite float
_CONTEXT = Context(prec=400)


def _to_decimal(value: float) -> Decimal:
    return Decimal(repr(float(value)))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Raises:
        ValueError: If value is NaN or infinite
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value: {value}")
    return int(_to_decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP, context=_CONTEXT))


def to_percentage(value: float) -> int:
    """Convert a [0, 1] fraction to an integer percentage (no clamping)."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot convert non-finite value: {value}")
    return int((_to_decimal(value) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP, context=_CONTEXT))


def format_fixed(value: float, places: int = 6) -> str:
    """
    Format with exactly `places` digits after the decimal point.

    Returns a string so trailing zeros survive. Negative zero is rendered
    unsigned.

    Raises:
        ValueError: If value is NaN or infinite
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite value: {value}")
    quantum = Decimal(1).scaleb(-places)
    rounded = _to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_CONTEXT)
    if rounded.is_zero():
        rounded = abs(rounded)
    return format(rounded, "f")
