from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from .exceptions import InvalidInput


def field(row, name, default=None):
    """Read ``name`` from an ORM row, a schema object or a plain dict."""
    if isinstance(row, Mapping):
        return row.get(name, default)
    return getattr(row, name, default)


def to_decimal(value, name: str) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    else:
        if value is None or isinstance(value, bool):
            raise InvalidInput(f"{name} must be a number, got {value!r}")
        try:
            # str() keeps floats like 2.5 exact instead of their binary expansion
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidInput(f"{name} must be a number, got {value!r}")
    if not result.is_finite():
        raise InvalidInput(f"{name} must be finite, got {value!r}")
    return result
