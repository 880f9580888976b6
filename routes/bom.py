from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access, get_default_currency
from models.bom import BOMLine
from models.sku import SKU
from models.material import Material
from models.user import User
from schemas.bom import BOMLineCreate, BOMLineResponse, BOMCostResponse
from schemas.material import MaterialResponse
from services.costing import bom_cost_breakdown, line_cost
from services.exceptions import InvalidInput
from services.formatting import format_money

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/boms", tags=["Bill of Materials"])

def get_sku_or_404(db: Session, sku_code: str) -> SKU:
    sku = db.query(SKU).options(joinedload(SKU.style)).filter(SKU.sku_code == sku_code).first()
    if not sku:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"SKU {sku_code} not found"
        )
    return sku

@router.get("/", response_model=List[BOMLineResponse])
def get_bom_lines(
    sku_code: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Get BOM lines, optionally for a single SKU"""
    query = db.query(BOMLine)
    if sku_code:
        query = query.filter(BOMLine.sku_code == sku_code)
    return query.order_by(BOMLine.sku_code, BOMLine.id).all()

@router.post("/", response_model=BOMLineResponse, status_code=status.HTTP_201_CREATED)
def create_bom_line(
    line_data: BOMLineCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Add a material to a SKU's bill of materials"""
    sku = get_sku_or_404(db, line_data.sku_code)

    material = db.query(Material).filter(Material.material_code == line_data.material_code).first()
    if not material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material {line_data.material_code} not found"
        )

    duplicate = db.query(BOMLine).filter(
        BOMLine.sku_code == line_data.sku_code,
        BOMLine.material_code == line_data.material_code
    ).first()
    if duplicate:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Material {line_data.material_code} is already on the BOM of {line_data.sku_code}"
        )

    try:
        line_cost(line_data.consumption_per_garment, line_data.wastage_percentage, material.cost_per_unit)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    # style_code always follows the SKU
    db_line = BOMLine(
        sku_code=sku.sku_code,
        style_code=sku.style_code,
        material_code=material.material_code,
        consumption_per_garment=line_data.consumption_per_garment,
        wastage_percentage=line_data.wastage_percentage
    )
    db.add(db_line)
    db.commit()
    db.refresh(db_line)

    logger.info(f"BOM line {material.material_code} added to {sku.sku_code} by {current_user.username}")
    return db_line

@router.delete("/{line_id}")
def delete_bom_line(
    line_id: int,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Remove a BOM line"""
    db_line = db.query(BOMLine).filter(BOMLine.id == line_id).first()
    if not db_line:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="BOM line not found"
        )

    db.delete(db_line)
    db.commit()

    logger.info(f"BOM line {line_id} deleted by {current_user.username}")
    return {"message": "BOM line deleted successfully"}

@router.get("/sku/{sku_code}/cost", response_model=BOMCostResponse)
def get_bom_cost(
    sku_code: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
    currency: str = Depends(get_default_currency)
):
    """Estimated material cost of one garment of the SKU"""
    sku = get_sku_or_404(db, sku_code)

    bom_lines = db.query(BOMLine).filter(BOMLine.sku_code == sku_code).order_by(BOMLine.id).all()
    material_codes = {line.material_code for line in bom_lines}
    materials_by_code = {
        m.material_code: m
        for m in db.query(Material).filter(Material.material_code.in_(material_codes)).all()
    } if material_codes else {}

    try:
        breakdown = bom_cost_breakdown(bom_lines, materials_by_code, sku_code)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {
        "sku_code": sku.sku_code,
        "style_code": sku.style_code,
        "currency": currency,
        "lines": breakdown["lines"],
        "total_cost": breakdown["total_cost"],
        "formatted_total": format_money(breakdown["total_cost"], currency),
        "target_cost_price": sku.style.target_cost_price if sku.style else None,
        "missing_materials": breakdown["missing_materials"],
    }

@router.get("/sku/{sku_code}/available-materials", response_model=List[MaterialResponse])
def get_available_materials(
    sku_code: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Materials not yet on the SKU's bill of materials"""
    get_sku_or_404(db, sku_code)
    used = {line.material_code for line in db.query(BOMLine).filter(BOMLine.sku_code == sku_code).all()}
    materials = db.query(Material).order_by(Material.material_code).all()
    return [m for m in materials if m.material_code not in used]
