from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Date
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base
import enum


class WorkOrderStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class WorkOrder(Base):
    __tablename__ = "work_orders"

    wo_number = Column(String(50), primary_key=True, index=True)
    sku_code = Column(String(50), ForeignKey("skus.sku_code"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    status = Column(String(20), default=WorkOrderStatus.PENDING.value, nullable=False)
    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    sku = relationship("SKU")

    def __repr__(self):
        return f"<WorkOrder(wo_number='{self.wo_number}', sku_code='{self.sku_code}', quantity={self.quantity})>"
