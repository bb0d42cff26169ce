"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pocketbook.api.dependencies import Authorizer, get_authorizer
from pocketbook.database import get_db
from pocketbook.models.user import User
from pocketbook.schemas.common import DataResponse
from pocketbook.schemas.user import UserResponse
from pocketbook.services.auth import get_user_by_username
from pocketbook.services.verifier import AdminAuth, UserAuth

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=DataResponse[list[UserResponse]])
def get_users(
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
):
    """Get all users (admin only)."""
    auth.require(AdminAuth())
    users = db.query(User).order_by(User.id).all()
    return DataResponse(
        data=[UserResponse.model_validate(user) for user in users],
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get("/{username}", response_model=DataResponse[UserResponse])
def get_user(
    username: str,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
):
    """Get one user. Regular users may only look themselves up."""
    auth.require(UserAuth(username), AdminAuth())
    user = get_user_by_username(db, username)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return DataResponse(
        data=UserResponse.model_validate(user),
        refreshed_token_message=auth.refreshed_token_message,
    )
