from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access
from models.style import Style
from models.sku import SKU
from models.user import User
from schemas.style import StyleCreate, StyleUpdate, StyleResponse
from utils.codes import generate_code
from utils.updates import reject_null_updates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/styles", tags=["Styles"])

@router.get("/", response_model=List[StyleResponse])
def get_styles(
    skip: int = 0,
    limit: int = 100,
    search: Optional[str] = None,
    brand: Optional[str] = None,
    season: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get all styles with optional filtering"""
    query = db.query(Style)

    if search:
        query = query.filter(
            or_(
                Style.style_code.ilike(f"%{search}%"),
                Style.description.ilike(f"%{search}%")
            )
        )
    if brand:
        query = query.filter(Style.brand == brand)
    if season:
        query = query.filter(Style.season == season)

    return query.order_by(Style.style_code).offset(skip).limit(limit).all()

@router.get("/{style_code}", response_model=StyleResponse)
def get_style(
    style_code: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get style by code"""
    style = db.query(Style).filter(Style.style_code == style_code).first()
    if not style:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style {style_code} not found"
        )
    return style

@router.post("/", response_model=StyleResponse, status_code=status.HTTP_201_CREATED)
def create_style(
    style: StyleCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Create new style"""
    style_data = style.model_dump()
    style_code = style_data.pop("style_code") or generate_code(db, Style.style_code, "STY-")

    if db.query(Style).filter(Style.style_code == style_code).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Style {style_code} already exists"
        )

    db_style = Style(style_code=style_code, created_by=current_user.username, **style_data)
    db.add(db_style)
    db.commit()
    db.refresh(db_style)

    logger.info(f"Style {style_code} created by {current_user.username}")
    return db_style

@router.put("/{style_code}", response_model=StyleResponse)
def update_style(
    style_code: str,
    style_update: StyleUpdate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Update style"""
    db_style = db.query(Style).filter(Style.style_code == style_code).first()
    if not db_style:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style {style_code} not found"
        )

    update_data = style_update.model_dump(exclude_unset=True)
    reject_null_updates(Style, update_data)
    for field, value in update_data.items():
        setattr(db_style, field, value)

    db.commit()
    db.refresh(db_style)
    return db_style

@router.delete("/{style_code}")
def delete_style(
    style_code: str,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Delete a style that has no SKUs"""
    db_style = db.query(Style).filter(Style.style_code == style_code).first()
    if not db_style:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style {style_code} not found"
        )

    sku_count = db.query(SKU).filter(SKU.style_code == style_code).count()
    if sku_count:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete style {style_code}: {sku_count} SKU(s) still reference it"
        )

    db.delete(db_style)
    db.commit()
    logger.info(f"Style {style_code} deleted by {current_user.username}")
    return {"message": f"Style {style_code} deleted successfully"}
