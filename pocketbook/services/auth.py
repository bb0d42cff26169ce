"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.orm import Session

from pocketbook.config import Settings
from pocketbook.models.enums import Role
from pocketbook.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def user_claims(user: User) -> dict[str, Any]:
    """Claims shared by access and refresh tokens."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
    }


def create_token(claims: dict[str, Any], expires_in: timedelta, secret: str, algorithm: str) -> str:
    """Sign `claims` with an expiry `expires_in` from now."""
    to_encode = dict(claims)
    to_encode["exp"] = datetime.now(UTC) + expires_in
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def create_access_token(user: User, settings: Settings) -> str:
    """Create a short-lived access token."""
    return create_token(
        user_claims(user),
        timedelta(minutes=settings.access_token_expiration_minutes),
        settings.jwt_secret,
        settings.jwt_algorithm,
    )


def create_refresh_token(user: User, settings: Settings) -> str:
    """Create a long-lived refresh token."""
    return create_token(
        user_claims(user),
        timedelta(days=settings.refresh_token_expiration_days),
        settings.jwt_secret,
        settings.jwt_algorithm,
    )


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_refresh_token(db: Session, refresh_token: str | None) -> User | None:
    """Get the user currently holding `refresh_token`."""
    if not refresh_token:
        return None
    return db.query(User).filter(User.refresh_token == refresh_token).first()


def user_exists(db: Session, username: str, email: str) -> bool:
    """Check whether the username or the email is already taken."""
    existing = (
        db.query(User.id).filter(or_(User.username == username, User.email == email)).first()
    )
    return existing is not None


def create_user(
    db: Session, username: str, email: str, password: str, role: Role = Role.REGULAR
) -> User:
    """Create a new user."""
    hashed_password = get_password_hash(password)
    user = User(username=username, email=email, password_hash=hashed_password, role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered {role.value} user '{username}'")
    return user


def bootstrap_admin(db: Session, username: str, email: str, password: str) -> User | None:
    """Create the first Admin account.

    Returns None without writing anything if an Admin already exists or the
    username/email is taken.
    """
    if db.query(User.id).filter(User.role == Role.ADMIN.value).first() is not None:
        logger.info("Admin user already present, skipping bootstrap")
        return None
    if user_exists(db, username, email):
        logger.warning(f"Cannot bootstrap admin: '{username}' or '{email}' already registered")
        return None
    return create_user(db, username, email, password, role=Role.ADMIN)
