"""Pydantic schemas for API requests and responses."""

from pocketbook.schemas.auth import TokenPair, UserLogin, UserRegister
from pocketbook.schemas.category import (
    CategoryCreate,
    CategoryDelete,
    CategoryResponse,
    CategoryUpdate,
    CountData,
)
from pocketbook.schemas.common import DataResponse, MessageData
from pocketbook.schemas.group import (
    GroupAddMembers,
    GroupCreate,
    GroupDelete,
    GroupMembershipResult,
    GroupResponse,
)
from pocketbook.schemas.transaction import (
    TransactionCreate,
    TransactionDelete,
    TransactionResponse,
    TransactionsDelete,
)
from pocketbook.schemas.user import UserResponse

__all__ = [
    "DataResponse",
    "MessageData",
    "UserRegister",
    "UserLogin",
    "TokenPair",
    "UserResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryDelete",
    "CategoryResponse",
    "CountData",
    "TransactionCreate",
    "TransactionDelete",
    "TransactionsDelete",
    "TransactionResponse",
    "GroupCreate",
    "GroupAddMembers",
    "GroupDelete",
    "GroupResponse",
    "GroupMembershipResult",
]
