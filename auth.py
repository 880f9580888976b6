from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.orm import Session
import logging
import warnings

from config.settings import settings
from models.user import User

# passlib probes bcrypt.__about__, which newer bcrypt builds no longer ship
warnings.filterwarnings("ignore", message=".*error reading bcrypt version.*")

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
    bcrypt__ident="2b"
)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, otherwise None."""
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, str(user.password)):
        logger.warning(f"Failed login attempt for {username}")
        return None
    return user

def create_access_token(username: str, role: Optional[str] = None, expires_delta: Optional[timedelta] = None) -> str:
    """Signed JWT carrying the username as ``sub`` and the role for clients to read."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {"sub": username, "exp": expire}
    if role:
        claims["role"] = role
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def verify_token(token: str) -> Optional[dict]:
    """Decoded claims, or None for an invalid or expired token."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
