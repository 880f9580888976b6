"""
Purchase order totals and workflow rules.

Status flow::

    Draft -> Ordered -> Shipped -> Received
      |         |          |
      +---------+----------+-----> Cancelled

Received and Cancelled are terminal. Items can only be added or removed while
the order is a Draft, and an order cannot leave Draft without items.
"""
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from models.purchase_order import POStatus
from .exceptions import InvalidInput, InvalidStatusTransition, MutationNotAllowed
from ._values import field, to_decimal

logger = logging.getLogger(__name__)

STATUS_TRANSITIONS = {
    POStatus.DRAFT: frozenset({POStatus.ORDERED, POStatus.CANCELLED}),
    POStatus.ORDERED: frozenset({POStatus.SHIPPED, POStatus.CANCELLED}),
    POStatus.SHIPPED: frozenset({POStatus.RECEIVED, POStatus.CANCELLED}),
    POStatus.RECEIVED: frozenset(),
    POStatus.CANCELLED: frozenset(),
}


def as_status(value) -> POStatus:
    try:
        return POStatus(value)
    except ValueError:
        valid = ", ".join(s.value for s in POStatus)
        raise InvalidInput(f"Invalid status '{value}'. Valid statuses are: {valid}")


def item_total(quantity, unit_cost) -> Decimal:
    qty = to_decimal(quantity, "quantity")
    if qty <= 0:
        raise InvalidInput(f"quantity must be > 0, got {qty}")
    cost = to_decimal(unit_cost, "unit_cost")
    if cost < 0:
        raise InvalidInput(f"unit_cost must be >= 0, got {cost}")
    return qty * cost


def po_totals(
    items: Iterable,
    statuses_by_po: Optional[Mapping] = None,
    include_statuses: Optional[Iterable] = None,
) -> Dict[str, Decimal]:
    """Total value per PO number.

    Orders without items do not appear; use :func:`po_total` to read a total
    with the zero default. With ``include_statuses`` only orders whose status
    in ``statuses_by_po`` is one of them are totalled.
    """
    allowed = None
    if include_statuses is not None:
        allowed = {as_status(s) for s in include_statuses}
        statuses_by_po = statuses_by_po or {}

    totals = defaultdict(lambda: Decimal("0"))
    for item in items:
        po_number = field(item, "po_number")
        if allowed is not None:
            po_status = statuses_by_po.get(po_number)
            if po_status is None or as_status(po_status) not in allowed:
                continue
        totals[po_number] += item_total(field(item, "quantity"), field(item, "unit_cost"))
    return dict(totals)


def po_total(totals: Mapping, po_number: str) -> Decimal:
    return totals.get(po_number, Decimal("0"))


def po_item_counts(items: Iterable) -> Dict[str, int]:
    counts = defaultdict(int)
    for item in items:
        counts[field(item, "po_number")] += 1
    return dict(counts)


def ensure_items_mutable(po_status, po_number: Optional[str] = None):
    """Raise MutationNotAllowed unless the order is still a Draft."""
    current = as_status(po_status)
    if current is not POStatus.DRAFT:
        label = f"purchase order {po_number}" if po_number else "a purchase order"
        logger.warning(f"Rejected item change on {label} in {current.value} status")
        raise MutationNotAllowed(
            f"Items can only be added to or removed from Draft purchase orders; "
            f"{label} is {current.value}"
        )


def allowed_transitions(po_status, item_count: int) -> List[POStatus]:
    current = as_status(po_status)
    if current is POStatus.DRAFT and item_count == 0:
        return []
    return [s for s in POStatus if s in STATUS_TRANSITIONS[current]]


def check_status_transition(po_status, target_status, item_count: int) -> POStatus:
    """Validate a status change and return the target status.

    Keeping the current status is always accepted.
    """
    current = as_status(po_status)
    target = as_status(target_status)
    if target is current:
        return target

    if current is POStatus.DRAFT and item_count == 0:
        raise InvalidStatusTransition(
            "Purchase order must have at least one item to change status from 'Draft'"
        )
    if target not in STATUS_TRANSITIONS[current]:
        allowed = ", ".join(s.value for s in allowed_transitions(current, item_count)) or "none"
        raise InvalidStatusTransition(
            f"Cannot change status from {current.value} to {target.value} (allowed: {allowed})"
        )
    return target
