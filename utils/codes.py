from sqlalchemy.orm import Session


def generate_code(db: Session, column, prefix: str, width: int = 4) -> str:
    """Generate the next sequential code for ``column``, e.g. PO-0001, PO-0002."""
    model = column.class_
    last = db.query(model).filter(column.like(f"{prefix}%")).order_by(column.desc()).first()

    if not last:
        return f"{prefix}{1:0{width}d}"

    try:
        last_number = int(str(getattr(last, column.key))[len(prefix):])
        next_number = last_number + 1
    except (ValueError, IndexError):
        next_number = db.query(model).count() + 1

    new_code = f"{prefix}{next_number:0{width}d}"
    # Skip over codes already taken (e.g. entered by hand)
    while db.query(model).filter(column == new_code).first():
        next_number += 1
        new_code = f"{prefix}{next_number:0{width}d}"
    return new_code
