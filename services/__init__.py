from .exceptions import ERPError, InvalidInput, MutationNotAllowed, InvalidStatusTransition
from .costing import line_cost, total_bom_cost, bom_cost_breakdown, rate_lookup
from .requirements import material_requirements, required_quantity
from .purchasing import (
    po_totals, po_total, po_item_counts, ensure_items_mutable,
    check_status_transition, allowed_transitions, STATUS_TRANSITIONS
)
from .inventory import is_low_stock, low_stock_items
from .formatting import format_money

__all__ = [
    "ERPError", "InvalidInput", "MutationNotAllowed", "InvalidStatusTransition",
    "line_cost", "total_bom_cost", "bom_cost_breakdown", "rate_lookup",
    "material_requirements", "required_quantity",
    "po_totals", "po_total", "po_item_counts", "ensure_items_mutable",
    "check_status_transition", "allowed_transitions", "STATUS_TRANSITIONS",
    "is_low_stock", "low_stock_items", "format_money"
]
