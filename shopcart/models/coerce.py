"""
Numeric input helpers shared by the value objects
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional


def as_integer(value: Any) -> Optional[int]:
    """
    Return value as an int when it holds a whole number, else None.

    Booleans are rejected; floats are accepted only when integral (2.0 -> 2).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert an int/float/Decimal to Decimal going through str to keep the written digits"""
    if isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not result.is_finite():
        return None
    return result


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero"""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
