"""User model."""

from sqlalchemy import Column, Integer, String

from pocketbook.database import Base
from pocketbook.models.enums import Role
from pocketbook.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and transaction ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.REGULAR.value)
    # Latest issued refresh token; cleared on logout
    refresh_token = Column(String, nullable=True, index=True)
