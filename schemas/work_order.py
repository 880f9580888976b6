from pydantic import Field
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from models.work_order import WorkOrderStatus
from schemas.base import CamelModel

class WorkOrderBase(CamelModel):
    sku_code: str = Field(..., max_length=50)
    quantity: int = Field(..., gt=0, description="Garments to produce")
    start_date: date = Field(default_factory=date.today)
    end_date: Optional[date] = None
    status: WorkOrderStatus = WorkOrderStatus.PENDING

class WorkOrderCreate(WorkOrderBase):
    wo_number: Optional[str] = Field(None, max_length=50, description="Generated when omitted")

class WorkOrderUpdate(CamelModel):
    sku_code: Optional[str] = Field(None, max_length=50)
    quantity: Optional[int] = Field(None, gt=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[WorkOrderStatus] = None

class WorkOrderResponse(WorkOrderBase):
    wo_number: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class MaterialRequirement(CamelModel):
    material_code: str
    description: Optional[str] = None
    unit_of_measure: Optional[str] = None
    required_qty: Decimal
    on_hand_qty: Decimal
    shortfall: Decimal

class WorkOrderRequirementsResponse(CamelModel):
    wo_number: str
    sku_code: str
    quantity: int
    bom_defined: bool = Field(..., description="False when the SKU has no BOM lines")
    fully_stocked: bool = Field(..., description="BOM defined and no line is short")
    requirements: List[MaterialRequirement]
