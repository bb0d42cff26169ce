"""Transaction schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pocketbook.schemas.common import NonBlankStr


class TransactionCreate(BaseModel):
    """Record a transaction for a user."""

    username: NonBlankStr
    type: NonBlankStr
    amount: float = Field(..., allow_inf_nan=False)


class TransactionDelete(BaseModel):
    """Delete one transaction."""

    id: int


class TransactionsDelete(BaseModel):
    """Delete several transactions at once."""

    ids: list[int] = Field(..., min_length=1)


class TransactionResponse(BaseModel):
    """Transaction response, with the color of its category when listed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    type: str
    amount: float
    date: datetime
    color: str | None = None
