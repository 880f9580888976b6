from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, ForeignKey, Date, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base
import enum


class POStatus(str, enum.Enum):
    DRAFT = "Draft"
    ORDERED = "Ordered"
    SHIPPED = "Shipped"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"

    po_number = Column(String(50), primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False)
    order_date = Column(Date, nullable=False)
    delivery_date = Column(Date, nullable=True)
    status = Column(String(20), default=POStatus.DRAFT.value, nullable=False)  # Draft, Ordered, Shipped, Received, Cancelled
    notes = Column(Text, nullable=True)
    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    supplier = relationship("Supplier", back_populates="purchase_orders")
    items = relationship("PurchaseOrderItem", back_populates="purchase_order", cascade="all, delete-orphan", order_by="PurchaseOrderItem.id")

    def __repr__(self):
        return f"<PurchaseOrder(po_number='{self.po_number}', status='{self.status}')>"


class PurchaseOrderItem(Base):
    __tablename__ = "po_items"
    __table_args__ = (
        UniqueConstraint("po_number", "material_code", name="uq_po_items_po_material"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    po_number = Column(String(50), ForeignKey("purchase_orders.po_number"), nullable=False, index=True)
    material_code = Column(String(50), ForeignKey("materials.material_code"), nullable=False)
    quantity = Column(Numeric(15, 3), nullable=False)
    unit_cost = Column(Numeric(15, 4), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    purchase_order = relationship("PurchaseOrder", back_populates="items")
    material = relationship("Material")

    def __repr__(self):
        return f"<PurchaseOrderItem(id={self.id}, po_number='{self.po_number}', material_code='{self.material_code}')>"
