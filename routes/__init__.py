from .user import router as user_router
from .dashboard import router as dashboard_router
from .styles import router as styles_router
from .skus import router as skus_router
from .materials import router as materials_router
from .inventory import router as inventory_router
from .suppliers import router as suppliers_router
from .purchase_order import router as purchase_order_router
from .work_orders import router as work_orders_router
from .bom import router as bom_router
from .settings import router as settings_router
from fastapi import APIRouter

# Create main router
router = APIRouter()

# Include auth and user routes
router.include_router(user_router, tags=["Authentication & Users"])

# Include dashboard routes
router.include_router(dashboard_router)

# Include product master routes
router.include_router(styles_router)
router.include_router(skus_router)

# Include material and stock routes
router.include_router(materials_router)
router.include_router(inventory_router)

# Include suppliers routes
router.include_router(suppliers_router)

# Include purchase order routes
router.include_router(purchase_order_router, prefix="/purchase-orders", tags=["Purchase Orders"])

# Include production routes
router.include_router(work_orders_router)
router.include_router(bom_router)

# Include settings routes
router.include_router(settings_router)

__all__ = ["router"]
