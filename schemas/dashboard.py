from typing import List
from schemas.base import CamelModel
from schemas.work_order import WorkOrderResponse
from schemas.purchase_order import PurchaseOrderSummary


class DashboardResponse(CamelModel):
    total_styles: int
    total_skus: int
    low_stock_items: int
    active_purchase_orders: int
    work_orders_in_progress: int
    recent_work_orders: List[WorkOrderResponse]
    pending_purchase_orders: List[PurchaseOrderSummary]
