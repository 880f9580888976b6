from fastapi import HTTPException, status
from sqlalchemy import inspect


def reject_null_updates(model, update_data: dict):
    """400 when a partial update sets a NOT NULL column to null."""
    columns = inspect(model).columns
    nulls = sorted(
        name for name, value in update_data.items()
        if value is None and name in columns and not columns[name].nullable
    )
    if nulls:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Fields cannot be null: {', '.join(nulls)}"
        )
