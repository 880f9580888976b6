from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from schemas.base import CamelModel

class StyleBase(CamelModel):
    description: str = Field(..., description="Style description")
    image_url: Optional[str] = Field(None, max_length=500)
    product_category: Optional[str] = Field(None, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    season: Optional[str] = Field(None, max_length=50)
    target_cost_price: Decimal = Field(Decimal("0.00"), ge=0, description="Target cost price per garment")

class StyleCreate(StyleBase):
    style_code: Optional[str] = Field(None, max_length=50, description="Generated when omitted")

class StyleUpdate(CamelModel):
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    product_category: Optional[str] = Field(None, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    season: Optional[str] = Field(None, max_length=50)
    target_cost_price: Optional[Decimal] = Field(None, ge=0)

class StyleResponse(StyleBase):
    style_code: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
