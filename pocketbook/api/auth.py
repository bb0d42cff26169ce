"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from pocketbook.api.dependencies import Authorizer, get_authorizer
from pocketbook.config import Settings, get_settings
from pocketbook.database import get_db
from pocketbook.models.enums import Role
from pocketbook.schemas.auth import TokenPair, UserLogin, UserRegister
from pocketbook.schemas.common import DataResponse, MessageData
from pocketbook.services.auth import (
    create_access_token,
    create_refresh_token,
    create_user,
    get_user_by_email,
    get_user_by_refresh_token,
    user_exists,
    verify_password,
)
from pocketbook.services.verifier import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    AdminAuth,
    CookieSpec,
    SimpleAuth,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _register(db: Session, user_data: UserRegister, role: Role) -> None:
    if user_exists(db, user_data.username, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="already existing user",
        )
    create_user(db, user_data.username, user_data.email, user_data.password, role=role)


def _session_cookie(settings: Settings, key: str, value: str, max_age: int) -> CookieSpec:
    return CookieSpec(
        key=key,
        value=value,
        max_age=max_age,
        path=settings.cookie_path,
        samesite=settings.cookie_samesite,
        secure=settings.cookie_secure,
        domain=settings.cookie_domain,
    )


@router.post(
    "/register",
    response_model=DataResponse[MessageData],
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new regular user."""
    _register(db, user_data, Role.REGULAR)
    return DataResponse(data=MessageData(message="User added successfully"))


@router.post(
    "/admin",
    response_model=DataResponse[MessageData],
    status_code=status.HTTP_201_CREATED,
)
def register_admin(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
):
    """Register a new admin. Only admins may do this."""
    auth.require(AdminAuth())
    _register(db, user_data, Role.ADMIN)
    return DataResponse(
        data=MessageData(message="Admin added successfully"),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.post("/login", response_model=DataResponse[TokenPair])
def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email and password; sets the session cookies."""
    user = get_user_by_email(db, credentials.email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is not registered",
        )
    if not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Wrong credentials",
        )

    access_token = create_access_token(user, settings)
    refresh_token = create_refresh_token(user, settings)

    user.refresh_token = refresh_token
    db.commit()

    _session_cookie(settings, ACCESS_COOKIE, access_token, settings.access_token_max_age).apply(
        response
    )
    _session_cookie(
        settings, REFRESH_COOKIE, refresh_token, settings.refresh_token_max_age
    ).apply(response)

    logger.info(f"User '{user.username}' logged in")
    return DataResponse(data=TokenPair(access_token=access_token, refresh_token=refresh_token))


@router.get("/logout", response_model=DataResponse[MessageData])
def logout(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout: forget the stored refresh token and expire both cookies."""
    auth.require(SimpleAuth())

    refresh_token = request.cookies.get(REFRESH_COOKIE)
    if not refresh_token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Refresh token not in the cookies",
        )

    user = get_user_by_refresh_token(db, refresh_token)
    if not user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User not found")

    user.refresh_token = None
    db.commit()

    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            key=key,
            path=settings.cookie_path,
            domain=settings.cookie_domain,
            secure=settings.cookie_secure,
            httponly=True,
            samesite=settings.cookie_samesite,
        )

    logger.info(f"User '{user.username}' logged out")
    return DataResponse(data=MessageData(message="User logged out"))
