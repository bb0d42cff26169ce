"""Authentication schemas."""

from pydantic import BaseModel

from pocketbook.schemas.common import NonBlankStr, RequiredEmail


class UserRegister(BaseModel):
    """User registration request."""

    username: NonBlankStr
    email: RequiredEmail
    password: NonBlankStr


class UserLogin(BaseModel):
    """User login request."""

    email: RequiredEmail
    password: NonBlankStr


class TokenPair(BaseModel):
    """Tokens issued on login; also delivered as cookies."""

    access_token: str
    refresh_token: str
