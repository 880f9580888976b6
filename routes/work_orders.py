from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access
from models.work_order import WorkOrder, WorkOrderStatus
from models.sku import SKU
from models.bom import BOMLine
from models.material import Material
from models.inventory import InventoryItem
from models.user import User
from schemas.work_order import (
    WorkOrderCreate,
    WorkOrderUpdate,
    WorkOrderResponse,
    WorkOrderRequirementsResponse
)
from services.exceptions import InvalidInput
from services.requirements import material_requirements
from utils.codes import generate_code
from utils.updates import reject_null_updates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/work-orders", tags=["Work Orders"])

def get_work_order_or_404(db: Session, wo_number: str) -> WorkOrder:
    work_order = db.query(WorkOrder).filter(WorkOrder.wo_number == wo_number).first()
    if not work_order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Work order {wo_number} not found"
        )
    return work_order

def ensure_sku_exists(db: Session, sku_code: str):
    if not db.query(SKU).filter(SKU.sku_code == sku_code).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"SKU {sku_code} not found"
        )

@router.get("/", response_model=List[WorkOrderResponse])
def get_work_orders(
    skip: int = 0,
    limit: int = 100,
    sku_code: Optional[str] = None,
    wo_status: Optional[WorkOrderStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get work orders, newest first"""
    query = db.query(WorkOrder)
    if sku_code:
        query = query.filter(WorkOrder.sku_code == sku_code)
    if wo_status:
        query = query.filter(WorkOrder.status == wo_status.value)
    return query.order_by(WorkOrder.start_date.desc(), WorkOrder.wo_number.desc()).offset(skip).limit(limit).all()

@router.post("/", response_model=WorkOrderResponse, status_code=status.HTTP_201_CREATED)
def create_work_order(
    wo_data: WorkOrderCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Create a new production work order"""
    ensure_sku_exists(db, wo_data.sku_code)

    wo_number = wo_data.wo_number or generate_code(db, WorkOrder.wo_number, "WO-")
    if db.query(WorkOrder).filter(WorkOrder.wo_number == wo_number).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Work order number {wo_number} already exists"
        )

    db_work_order = WorkOrder(
        wo_number=wo_number,
        sku_code=wo_data.sku_code,
        quantity=wo_data.quantity,
        start_date=wo_data.start_date,
        end_date=wo_data.end_date,
        status=wo_data.status.value,
        created_by=current_user.username
    )
    db.add(db_work_order)
    db.commit()
    db.refresh(db_work_order)

    logger.info(f"Work order {wo_number} for {wo_data.quantity} x {wo_data.sku_code} created by {current_user.username}")
    return db_work_order

@router.get("/{wo_number}", response_model=WorkOrderResponse)
def get_work_order(
    wo_number: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    return get_work_order_or_404(db, wo_number)

@router.put("/{wo_number}", response_model=WorkOrderResponse)
def update_work_order(
    wo_number: str,
    wo_update: WorkOrderUpdate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    work_order = get_work_order_or_404(db, wo_number)

    update_data = wo_update.model_dump(exclude_unset=True)
    reject_null_updates(WorkOrder, update_data)
    if update_data.get("sku_code"):
        ensure_sku_exists(db, update_data["sku_code"])
    if update_data.get("status") is not None:
        update_data["status"] = update_data["status"].value

    for field, value in update_data.items():
        setattr(work_order, field, value)

    db.commit()
    db.refresh(work_order)

    logger.info(f"Work order {wo_number} updated by {current_user.username}")
    return work_order

@router.delete("/{wo_number}")
def delete_work_order(
    wo_number: str,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    work_order = get_work_order_or_404(db, wo_number)
    db.delete(work_order)
    db.commit()

    logger.info(f"Work order {wo_number} deleted by {current_user.username}")
    return {"message": f"Work order {wo_number} deleted successfully"}

@router.get("/{wo_number}/requirements", response_model=WorkOrderRequirementsResponse)
def get_work_order_requirements(
    wo_number: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Materials needed for the work order against what is on hand.

    A SKU without BOM lines has no requirements; that is reported as
    ``bomDefined: false`` rather than as fully stocked.
    """
    work_order = get_work_order_or_404(db, wo_number)

    bom_lines = db.query(BOMLine).filter(BOMLine.sku_code == work_order.sku_code).order_by(BOMLine.id).all()
    material_codes = {line.material_code for line in bom_lines}

    materials_by_code = {}
    inventory_by_code = {}
    if material_codes:
        materials_by_code = {
            m.material_code: m
            for m in db.query(Material).filter(Material.material_code.in_(material_codes)).all()
        }
        inventory_by_code = {
            i.material_code: i
            for i in db.query(InventoryItem).filter(InventoryItem.material_code.in_(material_codes)).all()
        }

    try:
        requirements = material_requirements(
            work_order.quantity, bom_lines, materials_by_code, inventory_by_code, work_order.sku_code
        )
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    bom_defined = bool(bom_lines)
    return {
        "wo_number": work_order.wo_number,
        "sku_code": work_order.sku_code,
        "quantity": work_order.quantity,
        "bom_defined": bom_defined,
        "fully_stocked": bom_defined and all(row["shortfall"] == 0 for row in requirements),
        "requirements": requirements,
    }
