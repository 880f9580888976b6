from database import Base
from .user import User, UserRole, UserStatus
from .style import Style
from .sku import SKU
from .material import Material
from .inventory import InventoryItem
from .suppliers import Supplier
from .purchase_order import PurchaseOrder, PurchaseOrderItem, POStatus
from .work_order import WorkOrder, WorkOrderStatus
from .bom import BOMLine
from .settings import Currency, Color, Size, MaterialType, UnitOfMeasure, LOOKUP_MODELS

__all__ = [
    "Base", "User", "UserRole", "UserStatus", "Style", "SKU", "Material",
    "InventoryItem", "Supplier", "PurchaseOrder", "PurchaseOrderItem", "POStatus",
    "WorkOrder", "WorkOrderStatus", "BOMLine",
    "Currency", "Color", "Size", "MaterialType", "UnitOfMeasure", "LOOKUP_MODELS"
]
