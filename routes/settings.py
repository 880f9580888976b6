from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from database import get_db
from dependencies import get_current_active_user, require_write_access, get_default_currency
from models.settings import Currency, Color, Size, MaterialType, UnitOfMeasure, LOOKUP_MODELS
from models.user import User
from schemas.settings import (
    SettingValueCreate,
    SettingValueResponse,
    CurrencyCreate,
    CurrencyResponse,
    SettingsResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])

def get_lookup_model(kind: str):
    model = LOOKUP_MODELS.get(kind)
    if model is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown setting list '{kind}'"
        )
    return model

@router.get("/", response_model=SettingsResponse)
def get_settings(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
    default_currency: str = Depends(get_default_currency)
):
    """All lookup lists used by the master data forms"""
    return {
        "default_currency": default_currency,
        "currencies": db.query(Currency).order_by(Currency.value).all(),
        "colors": db.query(Color).order_by(Color.value).all(),
        "sizes": db.query(Size).order_by(Size.id).all(),
        "material_types": db.query(MaterialType).order_by(MaterialType.value).all(),
        "units_of_measure": db.query(UnitOfMeasure).order_by(UnitOfMeasure.value).all(),
    }

# Currencies

@router.post("/currencies", response_model=CurrencyResponse, status_code=status.HTTP_201_CREATED)
def create_currency(
    currency: CurrencyCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    value = currency.value.strip().upper()
    if db.query(Currency).filter(Currency.value == value).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Currency {value} already exists"
        )

    # The first currency becomes the default
    is_first = db.query(Currency).count() == 0
    db_currency = Currency(value=value, is_default=is_first)
    db.add(db_currency)
    db.commit()
    db.refresh(db_currency)

    logger.info(f"Currency {value} added by {current_user.username}")
    return db_currency

@router.put("/currencies/{currency_id}/default", response_model=CurrencyResponse)
def set_default_currency(
    currency_id: int,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    """Make one currency the default; all others are cleared in the same transaction"""
    db_currency = db.query(Currency).filter(Currency.id == currency_id).first()
    if not db_currency:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Currency not found"
        )

    db.query(Currency).filter(Currency.id != currency_id).update(
        {Currency.is_default: False}, synchronize_session=False
    )
    db_currency.is_default = True
    db.commit()
    db.refresh(db_currency)

    logger.info(f"Default currency set to {db_currency.value} by {current_user.username}")
    return db_currency

@router.delete("/currencies/{currency_id}")
def delete_currency(
    currency_id: int,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    db_currency = db.query(Currency).filter(Currency.id == currency_id).first()
    if not db_currency:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Currency not found"
        )

    db.delete(db_currency)
    db.commit()

    logger.info(f"Currency {db_currency.value} deleted by {current_user.username}")
    return {"message": "Currency deleted successfully"}

# Colors, sizes, material types and units of measure

@router.post("/{kind}", response_model=SettingValueResponse, status_code=status.HTTP_201_CREATED)
def create_setting_value(
    kind: str,
    setting: SettingValueCreate,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    model = get_lookup_model(kind)
    value = setting.value.strip()

    if db.query(model).filter(model.value == value).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"'{value}' already exists in {kind}"
        )

    db_value = model(value=value)
    db.add(db_value)
    db.commit()
    db.refresh(db_value)

    logger.info(f"'{value}' added to {kind} by {current_user.username}")
    return db_value

@router.delete("/{kind}/{value_id}")
def delete_setting_value(
    kind: str,
    value_id: int,
    current_user: User = Depends(require_write_access),
    db: Session = Depends(get_db)
):
    model = get_lookup_model(kind)
    db_value = db.query(model).filter(model.id == value_id).first()
    if not db_value:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Value not found in {kind}"
        )

    db.delete(db_value)
    db.commit()

    logger.info(f"'{db_value.value}' removed from {kind} by {current_user.username}")
    return {"message": "Value deleted successfully"}
