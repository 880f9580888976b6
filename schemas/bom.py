from pydantic import Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from schemas.base import CamelModel

class BOMLineCreate(CamelModel):
    sku_code: str = Field(..., max_length=50)
    material_code: str = Field(..., max_length=50)
    consumption_per_garment: Decimal = Field(..., gt=0, description="Material used per garment")
    wastage_percentage: Decimal = Field(Decimal("0"), ge=0, description="5.0 means +5%")

class BOMLineResponse(CamelModel):
    id: int
    sku_code: str
    style_code: str
    material_code: str
    consumption_per_garment: Decimal
    wastage_percentage: Decimal
    created_at: Optional[datetime] = None

class BOMCostLine(CamelModel):
    id: Optional[int] = None
    material_code: str
    description: Optional[str] = None
    unit_of_measure: Optional[str] = None
    consumption_per_garment: Decimal
    wastage_percentage: Decimal
    cost_per_unit: Decimal
    line_cost: Decimal

class BOMCostResponse(CamelModel):
    sku_code: str
    style_code: str
    currency: str
    lines: List[BOMCostLine]
    total_cost: Decimal
    formatted_total: str
    target_cost_price: Optional[Decimal] = None
    missing_materials: List[str] = Field(default_factory=list, description="Material codes excluded from the total")
