"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from galley.database import Base
from galley.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    has_seen_onboarding = Column(Boolean, nullable=False, default=False)
