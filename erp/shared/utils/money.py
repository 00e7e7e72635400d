"""Decimal helpers for prices and totals."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_CENTS = Decimal("0.01")
_PRICE = Decimal("0.0001")


def to_decimal(value: Any) -> Decimal:
    """Coerce None/int/float/str/Decimal to Decimal (None -> 0)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value: Any) -> Decimal:
    """Round to 2 decimal places (half up), for totals."""
    return to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def to_unit_price(value: Any) -> Decimal:
    """Round to 4 decimal places (half up), for unit prices."""
    return to_decimal(value).quantize(_PRICE, rounding=ROUND_HALF_UP)


def apply_markup(cost: Any, markup_percent: Any) -> Decimal:
    """Unit price = cost * (1 + markup/100), rounded to 4 places."""
    return to_unit_price(to_decimal(cost) * (1 + to_decimal(markup_percent) / 100))
