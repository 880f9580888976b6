from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload
import logging

from database import get_db
from dependencies import get_current_active_user
from models.style import Style
from models.sku import SKU
from models.inventory import InventoryItem
from models.purchase_order import PurchaseOrder, POStatus
from models.work_order import WorkOrder, WorkOrderStatus
from models.user import User
from schemas.dashboard import DashboardResponse
from services.inventory import low_stock_items
from services.purchasing import po_totals, po_total

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_WORK_ORDERS = 5

@router.get("/", response_model=DashboardResponse)
def get_dashboard(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Headline counts, recent work orders and orders awaiting delivery"""
    ordered = db.query(PurchaseOrder).options(
        joinedload(PurchaseOrder.items),
        joinedload(PurchaseOrder.supplier)
    ).filter(PurchaseOrder.status == POStatus.ORDERED.value).order_by(PurchaseOrder.order_date.desc()).all()
    totals = po_totals([item for po in ordered for item in po.items])

    recent_work_orders = db.query(WorkOrder).order_by(
        WorkOrder.start_date.desc(), WorkOrder.wo_number.desc()
    ).limit(RECENT_WORK_ORDERS).all()

    return {
        "total_styles": db.query(Style).count(),
        "total_skus": db.query(SKU).count(),
        "low_stock_items": len(low_stock_items(db.query(InventoryItem).all())),
        "active_purchase_orders": len(ordered),
        "work_orders_in_progress": db.query(WorkOrder).filter(
            WorkOrder.status == WorkOrderStatus.IN_PROGRESS.value
        ).count(),
        "recent_work_orders": recent_work_orders,
        "pending_purchase_orders": [
            {
                "po_number": po.po_number,
                "supplier_id": po.supplier_id,
                "supplier_name": po.supplier.supplier_name if po.supplier else None,
                "order_date": po.order_date,
                "delivery_date": po.delivery_date,
                "status": po.status,
                "total_amount": po_total(totals, po.po_number),
                "items_count": len(po.items),
            }
            for po in ordered
        ],
    }
