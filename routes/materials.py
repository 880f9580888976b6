from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access
from models.material import Material
from models.inventory import InventoryItem
from models.bom import BOMLine
from models.purchase_order import PurchaseOrderItem
from models.user import User
from schemas.material import MaterialCreate, MaterialUpdate, MaterialResponse
from utils.codes import generate_code
from utils.updates import reject_null_updates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/materials", tags=["Materials"])

@router.get("/", response_model=List[MaterialResponse])
def get_materials(
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get all materials, optionally filtered by category or a search term"""
    query = db.query(Material)

    if category:
        query = query.filter(Material.category == category)
    if search:
        query = query.filter(
            or_(
                Material.material_code.ilike(f"%{search}%"),
                Material.description.ilike(f"%{search}%"),
                Material.supplier.ilike(f"%{search}%")
            )
        )

    return query.order_by(Material.material_code).offset(skip).limit(limit).all()

@router.get("/{material_code}", response_model=MaterialResponse)
def get_material(
    material_code: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get material by code"""
    material = db.query(Material).filter(Material.material_code == material_code).first()
    if not material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material {material_code} not found"
        )
    return material

@router.post("/", response_model=MaterialResponse, status_code=status.HTTP_201_CREATED)
def create_material(
    material: MaterialCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Create new material"""
    material_data = material.model_dump()
    material_code = material_data.pop("material_code") or generate_code(db, Material.material_code, "MAT-")

    if db.query(Material).filter(Material.material_code == material_code).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Material {material_code} already exists"
        )

    db_material = Material(material_code=material_code, **material_data)
    db.add(db_material)
    db.commit()
    db.refresh(db_material)

    logger.info(f"Material {material_code} created by {current_user.username}")
    return db_material

@router.put("/{material_code}", response_model=MaterialResponse)
def update_material(
    material_code: str,
    material_update: MaterialUpdate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Update material"""
    db_material = db.query(Material).filter(Material.material_code == material_code).first()
    if not db_material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material {material_code} not found"
        )

    update_data = material_update.model_dump(exclude_unset=True)
    reject_null_updates(Material, update_data)
    for field, value in update_data.items():
        setattr(db_material, field, value)

    db.commit()
    db.refresh(db_material)
    return db_material

@router.delete("/{material_code}")
def delete_material(
    material_code: str,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Delete a material that no BOM line, PO item or stock record uses"""
    db_material = db.query(Material).filter(Material.material_code == material_code).first()
    if not db_material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material {material_code} not found"
        )

    references = {
        "BOM line(s)": db.query(BOMLine).filter(BOMLine.material_code == material_code).count(),
        "purchase order item(s)": db.query(PurchaseOrderItem).filter(PurchaseOrderItem.material_code == material_code).count(),
        "inventory record(s)": db.query(InventoryItem).filter(InventoryItem.material_code == material_code).count(),
    }
    in_use = [f"{count} {label}" for label, count in references.items() if count]
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete material {material_code}: referenced by {', '.join(in_use)}"
        )

    db.delete(db_material)
    db.commit()
    logger.info(f"Material {material_code} deleted by {current_user.username}")
    return {"message": f"Material {material_code} deleted successfully"}
