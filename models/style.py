from sqlalchemy import Column, String, Text, DateTime, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base

class Style(Base):
    __tablename__ = "styles"

    style_code = Column(String(50), primary_key=True, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    product_category = Column(String(100), nullable=True)
    brand = Column(String(100), nullable=True)
    season = Column(String(50), nullable=True)
    target_cost_price = Column(Numeric(15, 2), default=0.00)
    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    skus = relationship("SKU", back_populates="style")

    def __repr__(self):
        return f"<Style(style_code='{self.style_code}', brand='{self.brand}')>"
