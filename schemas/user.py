from pydantic import Field
from typing import Optional
from datetime import datetime
from models.user import UserRole, UserStatus
from schemas.base import CamelModel

# Request schemas
class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE

class UserUpdate(CamelModel):
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    password: Optional[str] = Field(None, min_length=6)
    full_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None

class UserLogin(CamelModel):
    username: str
    password: str

# Response schemas
class UserResponse(CamelModel):
    id: int
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: UserRole
    status: UserStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class Token(CamelModel):
    access_token: str
    token_type: str
