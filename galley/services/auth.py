"""Token issuing and password handling.

Login itself is an external concern; this module issues bearer tokens for the
users table so the API can be driven without an identity provider.
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from galley.config import get_settings
from galley.models.user import User
from galley.services.seed_user import seed_new_user

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user: User) -> str:
    """Create a JWT access token for a user."""
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    claims = {"sub": str(user.id), "email": user.email, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token. Returns None when invalid or expired."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Return the user when the password matches."""
    user = get_user_by_email(db, email)
    if user and pwd_context.verify(password, user.password_hash):
        return user
    return None


def register_user(db: Session, email: str, password: str, name: str | None = None) -> User:
    """Create a user, seeding demo provisioning data when enabled."""
    user = User(email=email, password_hash=get_password_hash(password), name=name)
    db.add(user)
    db.flush()

    if get_settings().seed_new_users:
        seed_new_user(db, user.id)

    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
