from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from decimal import Decimal
from database import Base

class BOMLine(Base):
    __tablename__ = "boms"
    __table_args__ = (
        UniqueConstraint("sku_code", "material_code", name="uq_boms_sku_material"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    sku_code = Column(String(50), ForeignKey("skus.sku_code"), nullable=False, index=True)
    style_code = Column(String(50), ForeignKey("styles.style_code"), nullable=False, index=True)
    material_code = Column(String(50), ForeignKey("materials.material_code"), nullable=False)
    consumption_per_garment = Column(Numeric(15, 4), nullable=False)
    wastage_percentage = Column(Numeric(7, 2), default=Decimal("0.00"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    sku = relationship("SKU", back_populates="bom_lines")
    material = relationship("Material")

    def __repr__(self):
        return f"<BOMLine(id={self.id}, sku_code='{self.sku_code}', material_code='{self.material_code}')>"
