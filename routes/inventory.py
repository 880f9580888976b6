from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access
from models.inventory import InventoryItem
from models.material import Material
from models.user import User
from schemas.inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse
from services.inventory import is_low_stock, low_stock_items
from utils.updates import reject_null_updates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["Inventory"])

def build_inventory_response(item: InventoryItem):
    """Stock record with its material's description and unit"""
    material = item.material
    return {
        "material_code": item.material_code,
        "description": material.description if material else None,
        "unit_of_measure": material.unit_of_measure if material else None,
        "quantity_on_hand": item.quantity_on_hand,
        "min_stock_level": item.min_stock_level,
        "location": item.location,
        "grn": item.grn,
        "po_number": item.po_number,
        "is_low_stock": is_low_stock(item),
        "updated_at": item.updated_at,
    }

def get_item_or_404(db: Session, material_code: str) -> InventoryItem:
    item = db.query(InventoryItem).options(
        joinedload(InventoryItem.material)
    ).filter(InventoryItem.material_code == material_code).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No inventory record for material {material_code}"
        )
    return item

@router.get("/", response_model=List[InventoryItemResponse])
def get_inventory(
    skip: int = 0,
    limit: int = 100,
    low_stock: Optional[bool] = None,
    location: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get stock records; ``low_stock=true`` keeps only items below their minimum level"""
    query = db.query(InventoryItem).options(joinedload(InventoryItem.material))

    if location:
        query = query.filter(InventoryItem.location == location)

    items = query.order_by(InventoryItem.material_code).all()
    if low_stock is not None:
        items = low_stock_items(items) if low_stock else [item for item in items if not is_low_stock(item)]

    items = items[skip:skip + limit]
    return [build_inventory_response(item) for item in items]

@router.get("/{material_code}", response_model=InventoryItemResponse)
def get_inventory_item(
    material_code: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get the stock record of one material"""
    return build_inventory_response(get_item_or_404(db, material_code))

@router.post("/", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    item: InventoryItemCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Create the stock record of a material (one per material)"""
    if not db.query(Material).filter(Material.material_code == item.material_code).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material {item.material_code} not found"
        )

    if db.query(InventoryItem).filter(InventoryItem.material_code == item.material_code).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Inventory record for material {item.material_code} already exists"
        )

    db_item = InventoryItem(**item.model_dump())
    db.add(db_item)
    db.commit()
    db.refresh(db_item)

    logger.info(f"Inventory record for {db_item.material_code} created by {current_user.username}")
    return build_inventory_response(db_item)

@router.put("/{material_code}", response_model=InventoryItemResponse)
def update_inventory_item(
    material_code: str,
    item_update: InventoryItemUpdate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Update stock quantities or location"""
    db_item = get_item_or_404(db, material_code)

    update_data = item_update.model_dump(exclude_unset=True)
    reject_null_updates(InventoryItem, update_data)
    for field, value in update_data.items():
        setattr(db_item, field, value)

    db.commit()
    db.refresh(db_item)

    if is_low_stock(db_item):
        logger.info(f"Material {material_code} is below its minimum stock level")
    return build_inventory_response(db_item)

@router.delete("/{material_code}")
def delete_inventory_item(
    material_code: str,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Delete the stock record of a material"""
    db_item = get_item_or_404(db, material_code)
    db.delete(db_item)
    db.commit()
    logger.info(f"Inventory record for {material_code} deleted by {current_user.username}")
    return {"message": f"Inventory record for {material_code} deleted successfully"}
