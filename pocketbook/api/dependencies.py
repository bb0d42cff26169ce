"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from pocketbook.config import get_settings
from pocketbook.database import get_db
from pocketbook.models.user import User
from pocketbook.services.auth import get_user_by_refresh_token
from pocketbook.services.categories import CategoryService
from pocketbook.services.groups import GroupService
from pocketbook.services.transactions import TransactionService
from pocketbook.services.verifier import REFRESH_COOKIE, AuthResult, Capability, TokenVerifier


def get_verifier() -> TokenVerifier:
    """Get a token verifier bound to the configured signing key."""
    return TokenVerifier.from_settings(get_settings())


class Authorizer:
    """Verifies the session cookies of one request.

    Only the capability that grants access may renew the access cookie, so
    the renewal is written to the response here rather than in the verifier.
    """

    def __init__(self, request: Request, response: Response, verifier: TokenVerifier):
        self.request = request
        self.response = response
        self.verifier = verifier
        self.refreshed_token_message: str | None = None

    def check(self, capability: Capability) -> AuthResult:
        """Verify without touching the response."""
        return self.verifier.verify(self.request.cookies, capability)

    def require(self, *capabilities: Capability) -> AuthResult:
        """Return the first granting result, or raise 401 with the first denial cause."""
        denials = []
        for capability in capabilities:
            result = self.check(capability)
            if result.authorized:
                self._apply_renewal(result)
                return result
            denials.append(result)

        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=denials[0].cause)

    def _apply_renewal(self, result: AuthResult) -> None:
        if result.renewal is None:
            return
        result.renewal.cookie.apply(self.response)
        self.refreshed_token_message = result.renewal.message
        self.request.state.refreshed_token_message = result.renewal.message


def get_authorizer(
    request: Request,
    response: Response,
    verifier: Annotated[TokenVerifier, Depends(get_verifier)],
) -> Authorizer:
    """Get the request's authorizer."""
    return Authorizer(request, response, verifier)


def get_session_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the user holding the request's refresh token."""
    user = get_user_by_refresh_token(db, request.cookies.get(REFRESH_COOKIE))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid cookies")
    return user


def get_category_service(
    db: Annotated[Session, Depends(get_db)],
) -> CategoryService:
    """Get category service with dependencies."""
    return CategoryService(db)


def get_transaction_service(
    db: Annotated[Session, Depends(get_db)],
) -> TransactionService:
    """Get transaction service with dependencies."""
    return TransactionService(db)


def get_group_service(
    db: Annotated[Session, Depends(get_db)],
) -> GroupService:
    """Get group service with dependencies."""
    return GroupService(db)
