from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access, get_default_currency
from models.purchase_order import PurchaseOrder, PurchaseOrderItem, POStatus
from models.suppliers import Supplier
from models.material import Material
from models.user import User
from schemas.material import MaterialResponse
from schemas.purchase_order import (
    PurchaseOrderCreate,
    PurchaseOrderUpdate,
    PurchaseOrderResponse,
    PurchaseOrderSummary,
    PurchaseOrderStatusUpdate,
    PurchaseOrderTransitions,
    PurchaseOrderItemCreate
)
from services.exceptions import InvalidInput, MutationNotAllowed
from services.formatting import format_money
from services.purchasing import (
    po_totals, po_total, po_item_counts, item_total,
    ensure_items_mutable, allowed_transitions, check_status_transition
)
from utils.codes import generate_code
from utils.updates import reject_null_updates

logger = logging.getLogger(__name__)

router = APIRouter()

TERMINAL_STATUSES = (POStatus.RECEIVED.value, POStatus.CANCELLED.value)

# Helper functions to build responses with related data
def build_item_response(item: PurchaseOrderItem):
    return {
        "id": item.id,
        "po_number": item.po_number,
        "material_code": item.material_code,
        "description": item.material.description if item.material else None,
        "quantity": item.quantity,
        "unit_cost": item.unit_cost,
        "line_total": item_total(item.quantity, item.unit_cost),
    }

def build_purchase_order_response(po: PurchaseOrder, currency: str):
    """Purchase order with items, totals and the statuses it may move to"""
    totals = po_totals(po.items)
    total_amount = po_total(totals, po.po_number)
    return {
        "po_number": po.po_number,
        "supplier_id": po.supplier_id,
        "supplier_name": po.supplier.supplier_name if po.supplier else None,
        "order_date": po.order_date,
        "delivery_date": po.delivery_date,
        "status": po.status,
        "notes": po.notes,
        "created_by": po.created_by,
        "created_at": po.created_at,
        "updated_at": po.updated_at,
        "total_amount": total_amount,
        "formatted_total": format_money(total_amount, currency),
        "items_count": len(po.items),
        "allowed_transitions": allowed_transitions(po.status, len(po.items)),
        "items": [build_item_response(item) for item in po.items],
    }

def get_po_or_404(db: Session, po_number: str) -> PurchaseOrder:
    po = db.query(PurchaseOrder).options(
        joinedload(PurchaseOrder.items).joinedload(PurchaseOrderItem.material),
        joinedload(PurchaseOrder.supplier)
    ).filter(PurchaseOrder.po_number == po_number).first()

    if not po:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Purchase order {po_number} not found"
        )
    return po

def resolve_item_cost(db: Session, item_data: PurchaseOrderItemCreate) -> Decimal:
    """Validate the material and return the unit cost, defaulting to the material's rate"""
    material = db.query(Material).filter(Material.material_code == item_data.material_code).first()
    if not material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material {item_data.material_code} not found"
        )
    unit_cost = item_data.unit_cost if item_data.unit_cost is not None else material.cost_per_unit
    try:
        item_total(item_data.quantity, unit_cost)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return unit_cost

def commit_or_500(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error while trying to {action}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Could not {action}"
        )

# Purchase Order CRUD Operations

@router.post("/", response_model=PurchaseOrderResponse, status_code=status.HTTP_201_CREATED)
def create_purchase_order(
    po_data: PurchaseOrderCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db),
    currency: str = Depends(get_default_currency)
):
    """Create a new Draft purchase order, optionally with its first items."""
    po_number = po_data.po_number or generate_code(db, PurchaseOrder.po_number, "PO-")

    existing_po = db.query(PurchaseOrder).filter(PurchaseOrder.po_number == po_number).first()
    if existing_po:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Purchase order number {po_number} already exists"
        )

    supplier = db.query(Supplier).filter(Supplier.id == po_data.supplier_id).first()
    if not supplier:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Supplier with ID {po_data.supplier_id} not found"
        )

    material_codes = [item.material_code for item in po_data.items]
    if len(material_codes) != len(set(material_codes)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A material can only appear once per purchase order"
        )

    # New orders always start as Draft
    db_po = PurchaseOrder(
        po_number=po_number,
        supplier_id=po_data.supplier_id,
        order_date=po_data.order_date,
        delivery_date=po_data.delivery_date,
        status=POStatus.DRAFT.value,
        notes=po_data.notes,
        created_by=current_user.username
    )
    db.add(db_po)

    for item_data in po_data.items:
        unit_cost = resolve_item_cost(db, item_data)
        db.add(PurchaseOrderItem(
            po_number=po_number,
            material_code=item_data.material_code,
            quantity=item_data.quantity,
            unit_cost=unit_cost
        ))

    commit_or_500(db, f"create purchase order {po_number}")
    logger.info(f"Purchase order {po_number} created with {len(po_data.items)} item(s) by {current_user.username}")

    return build_purchase_order_response(get_po_or_404(db, po_number), currency)

@router.get("/", response_model=List[PurchaseOrderSummary])
def get_purchase_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    po_number: Optional[str] = Query(None, description="Substring match"),
    supplier_id: Optional[int] = Query(None),
    po_status: Optional[POStatus] = Query(None, alias="status"),
    order_date_from: Optional[date] = Query(None),
    order_date_to: Optional[date] = Query(None),
    delivery_date_from: Optional[date] = Query(None),
    delivery_date_to: Optional[date] = Query(None),
    items_count: Optional[int] = Query(None, ge=0, description="Exact number of items"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get purchase orders with filtering options."""
    query = db.query(PurchaseOrder).options(
        joinedload(PurchaseOrder.items),
        joinedload(PurchaseOrder.supplier)
    )

    if po_number:
        query = query.filter(PurchaseOrder.po_number.ilike(f"%{po_number}%"))
    if supplier_id:
        query = query.filter(PurchaseOrder.supplier_id == supplier_id)
    if po_status:
        query = query.filter(PurchaseOrder.status == po_status.value)
    if order_date_from:
        query = query.filter(PurchaseOrder.order_date >= order_date_from)
    if order_date_to:
        query = query.filter(PurchaseOrder.order_date <= order_date_to)
    if delivery_date_from:
        query = query.filter(PurchaseOrder.delivery_date >= delivery_date_from)
    if delivery_date_to:
        query = query.filter(PurchaseOrder.delivery_date <= delivery_date_to)

    purchase_orders = query.order_by(PurchaseOrder.po_number.desc()).all()

    all_items = [item for po in purchase_orders for item in po.items]
    totals = po_totals(all_items)
    counts = po_item_counts(all_items)

    if items_count is not None:
        purchase_orders = [po for po in purchase_orders if counts.get(po.po_number, 0) == items_count]

    return [
        {
            "po_number": po.po_number,
            "supplier_id": po.supplier_id,
            "supplier_name": po.supplier.supplier_name if po.supplier else None,
            "order_date": po.order_date,
            "delivery_date": po.delivery_date,
            "status": po.status,
            "total_amount": po_total(totals, po.po_number),
            "items_count": counts.get(po.po_number, 0),
        }
        for po in purchase_orders[skip:skip + limit]
    ]

@router.get("/totals", response_model=Dict[str, Decimal])
def get_purchase_order_totals(
    statuses: Optional[List[POStatus]] = Query(None, alias="status"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Total value per purchase order number; orders without items are omitted."""
    items = db.query(PurchaseOrderItem).all()
    if not statuses:
        return po_totals(items)

    statuses_by_po = dict(db.query(PurchaseOrder.po_number, PurchaseOrder.status).all())
    return po_totals(items, statuses_by_po, statuses)

@router.get("/{po_number}", response_model=PurchaseOrderResponse)
def get_purchase_order(
    po_number: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
    currency: str = Depends(get_default_currency)
):
    """Get a specific purchase order with its items."""
    return build_purchase_order_response(get_po_or_404(db, po_number), currency)

@router.put("/{po_number}", response_model=PurchaseOrderResponse)
def update_purchase_order(
    po_number: str,
    po_update: PurchaseOrderUpdate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db),
    currency: str = Depends(get_default_currency)
):
    """Update purchase order header fields (and status, subject to the workflow)."""
    po = get_po_or_404(db, po_number)

    if po.status in TERMINAL_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot update purchase order in {po.status} status"
        )

    update_data = po_update.model_dump(exclude_unset=True)
    reject_null_updates(PurchaseOrder, update_data)

    if update_data.get("supplier_id") is not None:
        if not db.query(Supplier).filter(Supplier.id == update_data["supplier_id"]).first():
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Supplier with ID {update_data['supplier_id']} not found"
            )

    new_status = update_data.pop("status", None)
    if new_status is not None:
        try:
            update_data["status"] = check_status_transition(po.status, new_status, len(po.items)).value
        except MutationNotAllowed as e:
            logger.warning(f"Rejected status change on {po_number}: {e}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    for field, value in update_data.items():
        setattr(po, field, value)

    commit_or_500(db, f"update purchase order {po_number}")
    db.refresh(po)
    return build_purchase_order_response(po, currency)

@router.put("/{po_number}/status", response_model=PurchaseOrderResponse)
def update_purchase_order_status(
    po_number: str,
    status_update: PurchaseOrderStatusUpdate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db),
    currency: str = Depends(get_default_currency)
):
    """Move a purchase order through its workflow."""
    po = get_po_or_404(db, po_number)
    previous_status = po.status

    try:
        target = check_status_transition(po.status, status_update.status, len(po.items))
    except MutationNotAllowed as e:
        logger.warning(f"Rejected status change on {po_number}: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    setattr(po, 'status', target.value)
    if status_update.notes:
        current_notes = getattr(po, 'notes')
        new_notes = f"{current_notes}\n{status_update.notes}" if current_notes else status_update.notes
        setattr(po, 'notes', new_notes)

    commit_or_500(db, f"update status of purchase order {po_number}")
    db.refresh(po)
    logger.info(f"Purchase order {po_number} moved from {previous_status} to {target.value} by {current_user.username}")
    return build_purchase_order_response(po, currency)

@router.get("/{po_number}/transitions", response_model=PurchaseOrderTransitions)
def get_purchase_order_transitions(
    po_number: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Statuses the purchase order can currently move to."""
    po = get_po_or_404(db, po_number)
    return {
        "po_number": po.po_number,
        "status": po.status,
        "items_count": len(po.items),
        "allowed_transitions": allowed_transitions(po.status, len(po.items)),
    }

@router.delete("/{po_number}")
def delete_purchase_order(
    po_number: str,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Delete a Draft purchase order and its items in one transaction."""
    po = get_po_or_404(db, po_number)

    # Only allow deletion of Draft orders
    if po.status != POStatus.DRAFT.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot delete purchase order in {po.status} status. Only Draft orders can be deleted."
        )

    item_count = len(po.items)
    db.delete(po)  # items go with it (delete-orphan cascade)
    commit_or_500(db, f"delete purchase order {po_number}")

    logger.info(f"Purchase order {po_number} and {item_count} item(s) deleted by {current_user.username}")
    return {"message": f"Purchase order {po_number} deleted successfully"}

# Purchase Order Items

@router.post("/{po_number}/items", response_model=PurchaseOrderResponse, status_code=status.HTTP_201_CREATED)
def add_purchase_order_item(
    po_number: str,
    item_data: PurchaseOrderItemCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db),
    currency: str = Depends(get_default_currency)
):
    """Add an item to a Draft purchase order."""
    po = get_po_or_404(db, po_number)

    try:
        ensure_items_mutable(po.status, po.po_number)
    except MutationNotAllowed as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if any(item.material_code == item_data.material_code for item in po.items):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Material {item_data.material_code} is already on purchase order {po_number}"
        )

    unit_cost = resolve_item_cost(db, item_data)
    po.items.append(PurchaseOrderItem(
        po_number=po_number,
        material_code=item_data.material_code,
        quantity=item_data.quantity,
        unit_cost=unit_cost
    ))

    commit_or_500(db, f"add item to purchase order {po_number}")
    logger.info(f"Item {item_data.material_code} x {item_data.quantity} added to {po_number} by {current_user.username}")
    return build_purchase_order_response(get_po_or_404(db, po_number), currency)

@router.delete("/{po_number}/items/{item_id}", response_model=PurchaseOrderResponse)
def delete_purchase_order_item(
    po_number: str,
    item_id: int,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db),
    currency: str = Depends(get_default_currency)
):
    """Remove an item from a Draft purchase order."""
    po = get_po_or_404(db, po_number)

    try:
        ensure_items_mutable(po.status, po.po_number)
    except MutationNotAllowed as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    item = next((item for item in po.items if item.id == item_id), None)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Item {item_id} not found on purchase order {po_number}"
        )

    po.items.remove(item)
    commit_or_500(db, f"remove item from purchase order {po_number}")
    logger.info(f"Item {item_id} removed from {po_number} by {current_user.username}")
    return build_purchase_order_response(get_po_or_404(db, po_number), currency)

@router.get("/{po_number}/available-materials", response_model=List[MaterialResponse])
def get_available_materials(
    po_number: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Materials not yet on the purchase order."""
    po = get_po_or_404(db, po_number)
    used = {item.material_code for item in po.items}
    materials = db.query(Material).order_by(Material.material_code).all()
    return [m for m in materials if m.material_code not in used]
