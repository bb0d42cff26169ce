"""Shared field types and the response envelope."""

from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, EmailStr
from pydantic_core import PydanticCustomError

T = TypeVar("T")


def require_text(value: Any) -> Any:
    """Reject strings that are empty or only whitespace."""
    if isinstance(value, str) and not value.strip():
        raise PydanticCustomError("empty_parameter", "Some parameter is an empty string")
    return value


NonBlankStr = Annotated[str, BeforeValidator(require_text)]
RequiredEmail = Annotated[EmailStr, BeforeValidator(require_text)]


class DataResponse(BaseModel, Generic[T]):
    """Standard response envelope.

    `refreshed_token_message` is set when the access cookie was renewed
    while serving the request.
    """

    data: T
    message: str | None = None
    refreshed_token_message: str | None = None


class MessageData(BaseModel):
    """Payload carrying only a confirmation message."""

    message: str
