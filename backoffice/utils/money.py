"""Currency helpers for the store boundary.

Money is ``Numeric(12, 2)`` in the database, ``Decimal`` inside services and a
plain ``float`` in API responses. Conversions go through ``str`` so binary
floating point noise never reaches the store.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, float, int, str]


def to_decimal(value: Number | None) -> Decimal:
    """Convert to a Decimal quantized to cents. ``None`` (e.g. SUM over no rows) is zero."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_float(value: Number | None) -> float:
    if value is None:
        return 0.0
    return float(to_decimal(value))


def format_idr(amount: Number) -> str:
    """Format as Indonesian rupiah: ``Rp 1.500.000,00``."""
    value = to_decimal(amount)
    sign = "-" if value < 0 else ""
    whole, _, cents = f"{abs(value):,.2f}".partition(".")
    return f"{sign}Rp {whole.replace(',', '.')},{cents}"


__all__ = ["CENT", "ZERO", "to_decimal", "to_float", "format_idr"]
