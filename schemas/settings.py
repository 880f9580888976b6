from pydantic import Field
from typing import List
from schemas.base import CamelModel


class SettingValueCreate(CamelModel):
    value: str = Field(..., min_length=1, max_length=50)


class SettingValueResponse(CamelModel):
    id: int
    value: str


class CurrencyCreate(CamelModel):
    value: str = Field(..., min_length=1, max_length=10, description="Currency code, e.g. USD")


class CurrencyResponse(CamelModel):
    id: int
    value: str
    is_default: bool


class SettingsResponse(CamelModel):
    default_currency: str
    currencies: List[CurrencyResponse]
    colors: List[SettingValueResponse]
    sizes: List[SettingValueResponse]
    material_types: List[SettingValueResponse]
    units_of_measure: List[SettingValueResponse]
