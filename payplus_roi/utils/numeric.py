"""Rounding and coercion helpers shared by the calculation engine"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


def round_money(value: float) -> float:
    """Round to cents, half away from zero (0.005 -> 0.01, -0.005 -> -0.01)"""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, for non-negative counts"""
    return int(math.floor(value + 0.5))


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 instead of faulting on a zero denominator"""
    return numerator / denominator if denominator else 0.0


def coerce_number(value: Any) -> float:
    """
    Coerce UI input to a float.

    Accepts numbers and numeric strings (thousands separators allowed).
    Anything else, including NaN and infinities, becomes 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.replace(",", "").strip()
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0
