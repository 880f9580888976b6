"""Material requirements of a work order against on-hand inventory."""
import logging
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional

from .costing import wastage_factor
from .exceptions import InvalidInput
from ._values import field, to_decimal

logger = logging.getLogger(__name__)


def required_quantity(consumption_per_garment, work_order_quantity, wastage_percentage) -> Decimal:
    consumption = to_decimal(consumption_per_garment, "consumption_per_garment")
    if consumption <= 0:
        raise InvalidInput(f"consumption_per_garment must be > 0, got {consumption}")
    quantity = to_decimal(work_order_quantity, "work_order_quantity")
    if quantity <= 0:
        raise InvalidInput(f"work_order_quantity must be > 0, got {quantity}")
    return consumption * quantity * wastage_factor(wastage_percentage)


def material_requirements(
    work_order_quantity,
    bom_lines: Iterable,
    materials_by_code: Mapping,
    inventory_by_code: Mapping,
    sku_code: Optional[str] = None,
) -> List[dict]:
    """One row per BOM line: required quantity, quantity on hand and shortfall.

    Shortfall is clamped at zero. A missing inventory record counts as nothing
    on hand. An empty BOM gives an empty list, which callers must not read as
    "fully stocked".
    """
    quantity = to_decimal(work_order_quantity, "work_order_quantity")
    if quantity <= 0:
        raise InvalidInput(f"work_order_quantity must be > 0, got {quantity}")

    rows = []
    for bom_line in bom_lines:
        if sku_code is not None and field(bom_line, "sku_code") != sku_code:
            continue
        material_code = field(bom_line, "material_code")
        required = required_quantity(
            field(bom_line, "consumption_per_garment"),
            quantity,
            field(bom_line, "wastage_percentage", 0),
        )

        stock = inventory_by_code.get(material_code)
        on_hand = Decimal("0")
        if stock is not None:
            on_hand = to_decimal(field(stock, "quantity_on_hand", 0), "quantity_on_hand")
        else:
            logger.warning(f"No inventory record for material {material_code}; counted as nothing on hand")

        material = materials_by_code.get(material_code)
        if material is None:
            logger.warning(
                f"BOM line of SKU {field(bom_line, 'sku_code')} references unknown material {material_code}"
            )
        rows.append({
            "material_code": material_code,
            "description": field(material, "description") if material is not None else None,
            "unit_of_measure": field(material, "unit_of_measure") if material is not None else None,
            "required_qty": required,
            "on_hand_qty": on_hand,
            "shortfall": max(Decimal("0"), required - on_hand),
        })
    return rows
