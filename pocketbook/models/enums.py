"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """User roles carried in token claims."""

    REGULAR = "Regular"
    ADMIN = "Admin"
