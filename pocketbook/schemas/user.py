"""User schemas."""

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Public user information."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    email: str
    role: str
