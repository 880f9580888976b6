from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from schemas.base import CamelModel

class MaterialBase(CamelModel):
    description: str = Field(..., description="Material description")
    category: Optional[str] = Field(None, max_length=100, description="Material type")
    unit_of_measure: str = Field(..., max_length=20)
    cost_per_unit: Decimal = Field(Decimal("0.00"), ge=0, description="Cost per unit of measure")
    supplier: Optional[str] = Field(None, max_length=100, description="Preferred supplier")
    min_order_quantity: Decimal = Field(Decimal("0"), ge=0)

class MaterialCreate(MaterialBase):
    material_code: Optional[str] = Field(None, max_length=50, description="Generated when omitted")

class MaterialUpdate(CamelModel):
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    unit_of_measure: Optional[str] = Field(None, max_length=20)
    cost_per_unit: Optional[Decimal] = Field(None, ge=0)
    supplier: Optional[str] = Field(None, max_length=100)
    min_order_quantity: Optional[Decimal] = Field(None, ge=0)

class MaterialResponse(MaterialBase):
    material_code: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
