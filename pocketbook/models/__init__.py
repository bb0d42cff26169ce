"""SQLAlchemy models."""

from pocketbook.models.category import Category
from pocketbook.models.group import Group, GroupMember
from pocketbook.models.transaction import Transaction
from pocketbook.models.user import User

__all__ = [
    "User",
    "Category",
    "Transaction",
    "Group",
    "GroupMember",
]
