from .base import CamelModel
from .user import UserCreate, UserUpdate, UserResponse, UserLogin, Token
from .style import StyleCreate, StyleUpdate, StyleResponse
from .sku import SKUCreate, SKUUpdate, SKUResponse
from .material import MaterialCreate, MaterialUpdate, MaterialResponse
from .inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse
from .suppliers import SupplierCreate, SupplierUpdate, SupplierResponse
from .purchase_order import (
    PurchaseOrderCreate, PurchaseOrderUpdate, PurchaseOrderResponse, PurchaseOrderSummary,
    PurchaseOrderStatusUpdate, PurchaseOrderTransitions,
    PurchaseOrderItemCreate, PurchaseOrderItemResponse
)
from .work_order import (
    WorkOrderCreate, WorkOrderUpdate, WorkOrderResponse,
    MaterialRequirement, WorkOrderRequirementsResponse
)
from .bom import BOMLineCreate, BOMLineResponse, BOMCostLine, BOMCostResponse
from .settings import (
    SettingValueCreate, SettingValueResponse, CurrencyCreate, CurrencyResponse, SettingsResponse
)
from .dashboard import DashboardResponse

__all__ = [
    "CamelModel",
    "UserCreate", "UserUpdate", "UserResponse", "UserLogin", "Token",
    "StyleCreate", "StyleUpdate", "StyleResponse",
    "SKUCreate", "SKUUpdate", "SKUResponse",
    "MaterialCreate", "MaterialUpdate", "MaterialResponse",
    "InventoryItemCreate", "InventoryItemUpdate", "InventoryItemResponse",
    "SupplierCreate", "SupplierUpdate", "SupplierResponse",
    "PurchaseOrderCreate", "PurchaseOrderUpdate", "PurchaseOrderResponse", "PurchaseOrderSummary",
    "PurchaseOrderStatusUpdate", "PurchaseOrderTransitions",
    "PurchaseOrderItemCreate", "PurchaseOrderItemResponse",
    "WorkOrderCreate", "WorkOrderUpdate", "WorkOrderResponse",
    "MaterialRequirement", "WorkOrderRequirementsResponse",
    "BOMLineCreate", "BOMLineResponse", "BOMCostLine", "BOMCostResponse",
    "SettingValueCreate", "SettingValueResponse", "CurrencyCreate", "CurrencyResponse", "SettingsResponse",
    "DashboardResponse"
]
