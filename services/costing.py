"""
BOM costing.

Material cost of a garment is rolled up from its BOM lines::

    line cost = consumption per garment * cost per unit * (1 + wastage % / 100)

Lines whose material is not in the materials snapshot contribute nothing to
the total. They are logged and reported back as ``missing_materials`` so the
caller can show that the figure is incomplete.
"""
import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Tuple

from .exceptions import InvalidInput
from ._values import field, to_decimal

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def rate_lookup(materials_by_code: Mapping, material_code: str) -> Optional[Tuple[Decimal, Optional[str]]]:
    """Return ``(cost_per_unit, unit_of_measure)`` for a material, or None if unknown."""
    material = materials_by_code.get(material_code)
    if material is None:
        return None
    cost = to_decimal(field(material, "cost_per_unit"), "cost_per_unit")
    return cost, field(material, "unit_of_measure")


def wastage_factor(wastage_percentage) -> Decimal:
    wastage = to_decimal(wastage_percentage, "wastage_percentage")
    if wastage < 0:
        raise InvalidInput(f"wastage_percentage must be >= 0, got {wastage}")
    return 1 + wastage / HUNDRED


def line_cost(consumption_per_garment, wastage_percentage, cost_per_unit) -> Decimal:
    """Cost of one BOM line for a single garment."""
    consumption = to_decimal(consumption_per_garment, "consumption_per_garment")
    if consumption <= 0:
        raise InvalidInput(f"consumption_per_garment must be > 0, got {consumption}")
    cost = to_decimal(cost_per_unit, "cost_per_unit")
    if cost < 0:
        raise InvalidInput(f"cost_per_unit must be >= 0, got {cost}")
    return consumption * cost * wastage_factor(wastage_percentage)


def bom_cost_breakdown(bom_lines: Iterable, materials_by_code: Mapping, sku_code: Optional[str] = None) -> dict:
    """Per-line costs, the total and the material codes that missed the lookup.

    When ``sku_code`` is given, lines belonging to other SKUs are ignored.
    """
    lines = []
    missing = []
    total = Decimal("0")

    for bom_line in bom_lines:
        if sku_code is not None and field(bom_line, "sku_code") != sku_code:
            continue
        material_code = field(bom_line, "material_code")
        rate = rate_lookup(materials_by_code, material_code)
        if rate is None:
            logger.warning(
                f"BOM line {field(bom_line, 'id')} of SKU {field(bom_line, 'sku_code')} "
                f"references unknown material {material_code}; excluded from cost"
            )
            missing.append(material_code)
            continue

        cost_per_unit, unit_of_measure = rate
        cost = line_cost(
            field(bom_line, "consumption_per_garment"),
            field(bom_line, "wastage_percentage", 0),
            cost_per_unit,
        )
        total += cost
        material = materials_by_code[material_code]
        lines.append({
            "id": field(bom_line, "id"),
            "material_code": material_code,
            "description": field(material, "description"),
            "unit_of_measure": unit_of_measure,
            "consumption_per_garment": to_decimal(field(bom_line, "consumption_per_garment"), "consumption_per_garment"),
            "wastage_percentage": to_decimal(field(bom_line, "wastage_percentage", 0), "wastage_percentage"),
            "cost_per_unit": cost_per_unit,
            "line_cost": cost,
        })

    return {"lines": lines, "total_cost": total, "missing_materials": missing}


def total_bom_cost(bom_lines: Iterable, materials_by_code: Mapping, sku_code: Optional[str] = None) -> Decimal:
    """Estimated material cost of one garment; 0 for an empty BOM."""
    return bom_cost_breakdown(bom_lines, materials_by_code, sku_code)["total_cost"]
