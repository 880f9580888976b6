from sqlalchemy import Column, String, Text, Boolean, DateTime, Numeric, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base

class SKU(Base):
    __tablename__ = "skus"

    sku_code = Column(String(50), primary_key=True, index=True)
    style_code = Column(String(50), ForeignKey("styles.style_code"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    color = Column(String(50), nullable=False)
    size = Column(String(20), nullable=False)
    barcode = Column(String(50), nullable=True, unique=True)
    retail_price = Column(Numeric(15, 2), default=0.00, nullable=False)
    wholesale_price = Column(Numeric(15, 2), nullable=True)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    style = relationship("Style", back_populates="skus")
    bom_lines = relationship("BOMLine", back_populates="sku")

    def __repr__(self):
        return f"<SKU(sku_code='{self.sku_code}', color='{self.color}', size='{self.size}')>"
