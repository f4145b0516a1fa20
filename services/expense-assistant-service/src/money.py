"""Money helpers.

Centralized so extraction, aggregation and rendered advice share identical
parsing and rounding semantics.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
UNIT = Decimal("1")
CURRENCY_SYMBOL = "₹"
# Largest amount accepted from a transcript or a request body.
MAX_AMOUNT = Decimal("1000000000000")


def parse_amount(raw: str) -> Decimal | None:
    """
    Convert a captured number such as ``"1,200"`` or ``"75.50"`` to a 2-place Decimal.

    Returns None for text that is not a finite number or that exceeds MAX_AMOUNT.
    """
    try:
        value = Decimal(raw.replace(",", ""))
        if not value.is_finite() or value > MAX_AMOUNT:
            return None
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Quantize to two places; raises ValueError for non-finite or out-of-range input."""
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite() or abs(amount) > MAX_AMOUNT:
            raise ValueError(f"Amount out of range: {value}")
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def round_half_up(value: Decimal) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(value.quantize(UNIT, rounding=ROUND_HALF_UP))


def format_amount(value: Decimal | int) -> str:
    """Render ``1000`` as ``"1000"`` and ``75.5`` as ``"75.50"``; no grouping separators."""
    if isinstance(value, int):
        return str(value)
    if value == value.to_integral_value():
        return str(int(value))
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))


def format_rupees(value: Decimal | int) -> str:
    return f"{CURRENCY_SYMBOL}{format_amount(value)}"
