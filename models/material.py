from sqlalchemy import Column, String, Text, DateTime, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base

class Material(Base):
    __tablename__ = "materials"

    material_code = Column(String(50), primary_key=True, index=True)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=True)
    unit_of_measure = Column(String(20), nullable=False)
    cost_per_unit = Column(Numeric(15, 4), default=0.00, nullable=False)
    supplier = Column(String(100), nullable=True)  # Preferred supplier name
    min_order_quantity = Column(Numeric(15, 3), default=0.000)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    inventory = relationship("InventoryItem", back_populates="material", uselist=False)

    def __repr__(self):
        return f"<Material(material_code='{self.material_code}', cost_per_unit={self.cost_per_unit})>"
