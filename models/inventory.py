from sqlalchemy import Column, String, DateTime, Numeric, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from decimal import Decimal
from database import Base

class InventoryItem(Base):
    __tablename__ = "inventory"

    material_code = Column(String(50), ForeignKey("materials.material_code"), primary_key=True, index=True)
    quantity_on_hand = Column(Numeric(15, 3), default=Decimal("0.000"), nullable=False)
    min_stock_level = Column(Numeric(15, 3), default=Decimal("0.000"), nullable=False)
    location = Column(String(100), nullable=True)
    grn = Column(String(50), nullable=True)  # Goods received note reference
    po_number = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    material = relationship("Material", back_populates="inventory")

    def __repr__(self):
        return f"<InventoryItem(material_code='{self.material_code}', quantity_on_hand={self.quantity_on_hand})>"
