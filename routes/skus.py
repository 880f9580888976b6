from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access
from models.sku import SKU
from models.style import Style
from models.bom import BOMLine
from models.work_order import WorkOrder
from models.user import User
from schemas.sku import SKUCreate, SKUUpdate, SKUResponse
from utils.updates import reject_null_updates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skus", tags=["SKUs"])

@router.get("/", response_model=List[SKUResponse])
def get_skus(
    skip: int = 0,
    limit: int = 100,
    style_code: Optional[str] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get SKUs, optionally only those of one style"""
    query = db.query(SKU)

    if style_code:
        query = query.filter(SKU.style_code == style_code)
    if is_active is not None:
        query = query.filter(SKU.is_active == is_active)
    if search:
        query = query.filter(
            or_(
                SKU.sku_code.ilike(f"%{search}%"),
                SKU.barcode.ilike(f"%{search}%"),
                SKU.color.ilike(f"%{search}%")
            )
        )

    return query.order_by(SKU.sku_code).offset(skip).limit(limit).all()

@router.get("/{sku_code}", response_model=SKUResponse)
def get_sku(
    sku_code: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get SKU by code"""
    sku = db.query(SKU).filter(SKU.sku_code == sku_code).first()
    if not sku:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"SKU {sku_code} not found"
        )
    return sku

@router.post("/", response_model=SKUResponse, status_code=status.HTTP_201_CREATED)
def create_sku(
    sku: SKUCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Create new SKU under an existing style"""
    if not db.query(Style).filter(Style.style_code == sku.style_code).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style {sku.style_code} not found"
        )

    if db.query(SKU).filter(SKU.sku_code == sku.sku_code).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"SKU {sku.sku_code} already exists"
        )

    if sku.barcode and db.query(SKU).filter(SKU.barcode == sku.barcode).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Barcode {sku.barcode} is already assigned"
        )

    db_sku = SKU(**sku.model_dump())
    db.add(db_sku)
    db.commit()
    db.refresh(db_sku)

    logger.info(f"SKU {db_sku.sku_code} created for style {db_sku.style_code} by {current_user.username}")
    return db_sku

@router.put("/{sku_code}", response_model=SKUResponse)
def update_sku(
    sku_code: str,
    sku_update: SKUUpdate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Update SKU"""
    db_sku = db.query(SKU).filter(SKU.sku_code == sku_code).first()
    if not db_sku:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"SKU {sku_code} not found"
        )

    update_data = sku_update.model_dump(exclude_unset=True)
    reject_null_updates(SKU, update_data)
    if update_data.get("barcode"):
        existing = db.query(SKU).filter(SKU.barcode == update_data["barcode"], SKU.sku_code != sku_code).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Barcode {update_data['barcode']} is already assigned"
            )

    for field, value in update_data.items():
        setattr(db_sku, field, value)

    db.commit()
    db.refresh(db_sku)
    return db_sku

@router.delete("/{sku_code}")
def delete_sku(
    sku_code: str,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Delete a SKU together with its BOM lines; refused while work orders reference it"""
    db_sku = db.query(SKU).filter(SKU.sku_code == sku_code).first()
    if not db_sku:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"SKU {sku_code} not found"
        )

    wo_count = db.query(WorkOrder).filter(WorkOrder.sku_code == sku_code).count()
    if wo_count:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete SKU {sku_code}: {wo_count} work order(s) still reference it"
        )

    db.query(BOMLine).filter(BOMLine.sku_code == sku_code).delete(synchronize_session=False)
    db.delete(db_sku)
    db.commit()
    logger.info(f"SKU {sku_code} deleted by {current_user.username}")
    return {"message": f"SKU {sku_code} deleted successfully"}
