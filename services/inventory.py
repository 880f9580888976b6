from decimal import Decimal
from typing import Iterable, List

from ._values import field, to_decimal


def is_low_stock(item) -> bool:
    """Quantity on hand has dropped below the minimum stock level."""
    on_hand = to_decimal(field(item, "quantity_on_hand", 0) or Decimal("0"), "quantity_on_hand")
    minimum = to_decimal(field(item, "min_stock_level", 0) or Decimal("0"), "min_stock_level")
    return on_hand < minimum


def low_stock_items(items: Iterable) -> List:
    return [item for item in items if is_low_stock(item)]
