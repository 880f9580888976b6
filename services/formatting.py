from decimal import Decimal, ROUND_HALF_UP

from ._values import to_decimal

CENT = Decimal("0.01")


def format_money(amount, currency: str) -> str:
    """Render an amount for display, e.g. ``USD 11.00``."""
    value = to_decimal(amount, "amount").quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{currency} {value}"
