from sqlalchemy import Column, Integer, String, Boolean
from database import Base


class Currency(Base):
    __tablename__ = "currencies"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(String(10), nullable=False, unique=True)
    is_default = Column(Boolean, default=False, nullable=False)


class Color(Base):
    __tablename__ = "colors"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(String(50), nullable=False, unique=True)


class Size(Base):
    __tablename__ = "sizes"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(String(20), nullable=False, unique=True)


class MaterialType(Base):
    __tablename__ = "material_types"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(String(50), nullable=False, unique=True)


class UnitOfMeasure(Base):
    __tablename__ = "units_of_measure"

    id = Column(Integer, primary_key=True, index=True)
    value = Column(String(20), nullable=False, unique=True)


# Lookup lists managed through /settings/{kind}
LOOKUP_MODELS = {
    "colors": Color,
    "sizes": Size,
    "material-types": MaterialType,
    "units-of-measure": UnitOfMeasure,
}
