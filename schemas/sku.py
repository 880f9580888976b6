from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from schemas.base import CamelModel

class SKUBase(CamelModel):
    style_code: str = Field(..., max_length=50, description="Parent style")
    description: Optional[str] = None
    color: str = Field(..., max_length=50)
    size: str = Field(..., max_length=20)
    barcode: Optional[str] = Field(None, max_length=50)
    retail_price: Decimal = Field(Decimal("0.00"), ge=0)
    wholesale_price: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: bool = True

class SKUCreate(SKUBase):
    sku_code: str = Field(..., min_length=1, max_length=50)

class SKUUpdate(CamelModel):
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=50)
    size: Optional[str] = Field(None, max_length=20)
    barcode: Optional[str] = Field(None, max_length=50)
    retail_price: Optional[Decimal] = Field(None, ge=0)
    wholesale_price: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

class SKUResponse(SKUBase):
    sku_code: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
