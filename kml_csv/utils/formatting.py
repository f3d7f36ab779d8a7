"""Formatting helpers."""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal

# Enough digits to quantize any finite float without overflowing the context.
_WIDE_CONTEXT = Context(prec=400)

_NUMBER = r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?"
_NUMBER_PREFIX = re.compile(rf"\s*{_NUMBER}")
_DECIMAL_PATTERN = re.compile(rf"\s*{_NUMBER}\s*")


def format_decimal(value: float, places: int = 6) -> str:
    """Return ``value`` with a fixed number of decimal places.

    Ties round away from zero on the exact binary value, as browsers do,
    and zero is never signed.
    """

    if not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("Infinity" if value > 0 else "-Infinity")
    if value == 0:
        value = 0.0
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_WIDE_CONTEXT)
    return format(rounded, "f")


def parse_float(value: str | None) -> float | None:
    """Parse a leading floating point number, or return ``None``.

    Mirrors the lenient parsing browsers apply to coordinate text: a
    numeric prefix such as ``"12.5abc"`` still yields ``12.5``.
    """

    if not value:
        return None
    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return None
    return float(match.group(0))


def is_decimal_text(value: str) -> bool:
    """Return ``True`` when ``value`` is entirely a number written with a dot."""

    return "." in value and bool(_DECIMAL_PATTERN.fullmatch(value))
