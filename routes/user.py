from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from dependencies import get_current_active_user, require_admin, require_superadmin
from models.user import User, UserRole, UserStatus
from schemas.user import UserCreate, UserUpdate, UserResponse, UserLogin, Token
from auth import authenticate_user, get_password_hash, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()

ADMIN_ROLES = (UserRole.ADMIN, UserRole.SUPERADMIN)

# Authentication endpoints
@router.post("/auth/login", response_model=Token)
def login(user_credentials: UserLogin, db: Session = Depends(get_db)):
    """Exchange username and password for a bearer token."""
    user = authenticate_user(db, user_credentials.username, user_credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.status != UserStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"User account is not active. Status: {user.status.value}"
        )

    logger.info(f"User {user.username} logged in")
    return {
        "access_token": create_access_token(user.username, user.role.value),
        "token_type": "bearer"
    }

@router.get("/auth/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_active_user)):
    """Get current user information using JWT token."""
    return current_user

# User CRUD endpoints
@router.get("/users", response_model=List[UserResponse])
def get_users(
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get all users (Admin/Superadmin only)."""
    return db.query(User).order_by(User.id).offset(skip).limit(limit).all()

@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get user by ID (Admin/Superadmin only)."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create new user (Admin/Superadmin only)."""
    existing_user = db.query(User).filter(User.username == user.username).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Username already registered")

    # Only superadmin can create admin/superadmin users
    if user.role in ADMIN_ROLES and current_user.role != UserRole.SUPERADMIN:
        raise HTTPException(status_code=403, detail="Insufficient permissions to create admin users")

    db_user = User(
        username=user.username,
        password=get_password_hash(user.password),
        full_name=user.full_name,
        email=user.email,
        role=user.role,
        status=user.status
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info(f"User {db_user.username} ({db_user.role.value}) created by {current_user.username}")
    return db_user

@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update user (Admin/Superadmin only)."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    # Only superadmin can modify admin/superadmin users
    if user.role in ADMIN_ROLES and current_user.role != UserRole.SUPERADMIN:
        raise HTTPException(status_code=403, detail="Insufficient permissions to modify admin users")

    update_data = user_update.model_dump(exclude_unset=True)

    if update_data.get("username"):
        existing = db.query(User).filter(User.username == update_data["username"], User.id != user_id).first()
        if existing:
            raise HTTPException(status_code=400, detail="Username already taken")

    if update_data.get("password"):
        update_data["password"] = get_password_hash(update_data["password"])

    if update_data.get("role") in ADMIN_ROLES and current_user.role != UserRole.SUPERADMIN:
        raise HTTPException(status_code=403, detail="Insufficient permissions to assign admin roles")

    for field, value in update_data.items():
        if value is not None:
            setattr(user, field, value)

    db.commit()
    db.refresh(user)
    logger.info(f"User {user.username} updated by {current_user.username}")
    return user

@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete user (Superadmin only)."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    # Prevent deleting yourself
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    db.delete(user)
    db.commit()
    logger.info(f"User {user.username} deleted by {current_user.username}")
    return {"message": "User deleted successfully"}
