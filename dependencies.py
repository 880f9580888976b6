from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer
from sqlalchemy.orm import Session

from config.settings import settings
from database import get_db
from models.user import User, UserRole, UserStatus
from models.settings import Currency
from auth import verify_token

# Security schemes - Only JWT Bearer token
security = HTTPBearer()

def get_current_user(
    credentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user using JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise credentials_exception
    username = payload.get("sub")
    if username is None:
        raise credentials_exception

    # Get user from database
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise credentials_exception

    return user

def get_current_active_user(current_user: User = Depends(get_current_user)):
    """Get current active user."""
    if current_user.status.value != UserStatus.ACTIVE.value:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is not active"
        )
    return current_user

def require_write_access(current_user: User = Depends(get_current_active_user)):
    """Viewers may read but not change data."""
    if current_user.role.value == UserRole.VIEWER.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Read-only account"
        )
    return current_user

def require_role(required_role: UserRole):
    """Dependency to require specific user role."""
    def role_checker(current_user: User = Depends(get_current_active_user)):
        if current_user.role.value == UserRole.SUPERADMIN.value:
            return current_user  # Superadmin can access everything

        if current_user.role.value != required_role.value:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions"
            )
        return current_user
    return role_checker

def get_default_currency(db: Session = Depends(get_db)) -> str:
    """Currency code used when formatting amounts for display."""
    currency = db.query(Currency).filter(Currency.is_default.is_(True)).first()
    return currency.value if currency else settings.DEFAULT_CURRENCY

# Common role dependencies
require_admin = require_role(UserRole.ADMIN)
require_superadmin = require_role(UserRole.SUPERADMIN)
