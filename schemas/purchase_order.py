from pydantic import Field
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from models.purchase_order import POStatus
from schemas.base import CamelModel

# Purchase Order Item Schemas
class PurchaseOrderItemCreate(CamelModel):
    material_code: str = Field(..., description="Material reference")
    quantity: Decimal = Field(..., gt=0, description="Quantity to order")
    unit_cost: Optional[Decimal] = Field(None, ge=0, description="Defaults to the material's cost per unit")

class PurchaseOrderItemResponse(CamelModel):
    id: int
    po_number: str
    material_code: str
    description: Optional[str] = None
    quantity: Decimal
    unit_cost: Decimal
    line_total: Decimal

# Purchase Order Main Schemas
class PurchaseOrderBase(CamelModel):
    supplier_id: int = Field(..., description="Supplier ID reference")
    order_date: date = Field(default_factory=date.today, description="Purchase Order Date")
    delivery_date: Optional[date] = Field(None, description="Expected delivery date")
    notes: Optional[str] = Field(None, description="Additional remarks")

class PurchaseOrderCreate(PurchaseOrderBase):
    po_number: Optional[str] = Field(None, max_length=50, description="Generated when omitted")
    items: List[PurchaseOrderItemCreate] = Field(default_factory=list, description="Initial items")

class PurchaseOrderUpdate(CamelModel):
    supplier_id: Optional[int] = None
    order_date: Optional[date] = None
    delivery_date: Optional[date] = None
    status: Optional[POStatus] = None
    notes: Optional[str] = None

class PurchaseOrderResponse(PurchaseOrderBase):
    po_number: str
    status: POStatus
    supplier_name: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    total_amount: Decimal
    formatted_total: Optional[str] = None
    items_count: int
    allowed_transitions: List[POStatus] = []
    items: List[PurchaseOrderItemResponse] = []

class PurchaseOrderSummary(CamelModel):
    """Summary view of purchase orders"""
    po_number: str
    supplier_id: int
    supplier_name: Optional[str] = None
    order_date: date
    delivery_date: Optional[date] = None
    status: POStatus
    total_amount: Decimal
    items_count: int

# Status update schema
class PurchaseOrderStatusUpdate(CamelModel):
    status: POStatus = Field(..., description="New status")
    notes: Optional[str] = Field(None, description="Status change remarks")

class PurchaseOrderTransitions(CamelModel):
    po_number: str
    status: POStatus
    items_count: int
    allowed_transitions: List[POStatus]
