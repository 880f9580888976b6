from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from schemas.base import CamelModel

class InventoryItemBase(CamelModel):
    quantity_on_hand: Decimal = Field(Decimal("0"), ge=0)
    min_stock_level: Decimal = Field(Decimal("0"), ge=0)
    location: Optional[str] = Field(None, max_length=100)
    grn: Optional[str] = Field(None, max_length=50, description="Goods received note")
    po_number: Optional[str] = Field(None, max_length=50)

class InventoryItemCreate(InventoryItemBase):
    material_code: str = Field(..., max_length=50)

class InventoryItemUpdate(CamelModel):
    quantity_on_hand: Optional[Decimal] = Field(None, ge=0)
    min_stock_level: Optional[Decimal] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=100)
    grn: Optional[str] = Field(None, max_length=50)
    po_number: Optional[str] = Field(None, max_length=50)

class InventoryItemResponse(InventoryItemBase):
    material_code: str
    description: Optional[str] = None
    unit_of_measure: Optional[str] = None
    is_low_stock: bool
    updated_at: Optional[datetime] = None
