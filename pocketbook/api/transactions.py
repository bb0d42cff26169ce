"""Transaction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from pocketbook.api.dependencies import (
    Authorizer,
    get_authorizer,
    get_category_service,
    get_group_service,
    get_transaction_service,
)
from pocketbook.database import get_db
from pocketbook.models.transaction import Transaction
from pocketbook.models.user import User
from pocketbook.schemas.common import DataResponse, MessageData
from pocketbook.schemas.transaction import (
    TransactionCreate,
    TransactionDelete,
    TransactionResponse,
    TransactionsDelete,
)
from pocketbook.services.auth import get_user_by_username
from pocketbook.services.categories import CategoryService
from pocketbook.services.filters import FilterError, build_amount_filter, build_date_filter
from pocketbook.services.groups import GroupService
from pocketbook.services.transactions import TransactionService
from pocketbook.services.verifier import AdminAuth, GroupAuth, UserAuth

router = APIRouter(prefix="/api", tags=["transactions"])


def _rows_to_response(rows: list[tuple[Transaction, str]]) -> list[TransactionResponse]:
    return [
        TransactionResponse(
            id=transaction.id,
            username=transaction.username,
            type=transaction.type,
            amount=transaction.amount,
            date=transaction.date,
            color=color,
        )
        for transaction, color in rows
    ]


def _require_user(db: Session, username: str) -> User:
    user = get_user_by_username(db, username)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _require_category(categories: CategoryService, category: str) -> None:
    if categories.get_category(category) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")


@router.post(
    "/users/{username}/transactions",
    response_model=DataResponse[TransactionResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    username: str,
    transaction_data: TransactionCreate,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Record a transaction for the calling user."""
    if transaction_data.username != username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username in the body does not match the route",
        )
    auth.require(UserAuth(username))

    _require_user(db, username)
    _require_category(categories, transaction_data.type)

    transaction = service.create_transaction(
        username, transaction_data.type, transaction_data.amount
    )
    return DataResponse(
        data=TransactionResponse.model_validate(transaction),
        message="Transaction created",
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get("/transactions", response_model=DataResponse[list[TransactionResponse]])
def get_all_transactions(
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Get every transaction (admin only)."""
    auth.require(AdminAuth())
    return DataResponse(
        data=_rows_to_response(service.list_all()),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get(
    "/users/{username}/transactions",
    response_model=DataResponse[list[TransactionResponse]],
)
def get_transactions_by_user(
    username: str,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Get a user's transactions.

    Regular users may narrow the result with the `date`, `from`, `upTo`,
    `min` and `max` query parameters; admins always get the full list.
    """
    result = auth.require(UserAuth(username), AdminAuth())
    _require_user(db, username)

    date_filter = amount_filter = None
    if not result.is_admin:
        try:
            date_filter = build_date_filter(request.query_params)
            amount_filter = build_amount_filter(request.query_params)
        except FilterError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    rows = service.list_for_user(username, date_filter=date_filter, amount_filter=amount_filter)
    return DataResponse(
        data=_rows_to_response(rows),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get(
    "/users/{username}/transactions/category/{category}",
    response_model=DataResponse[list[TransactionResponse]],
)
def get_transactions_by_user_by_category(
    username: str,
    category: str,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Get a user's transactions of one category."""
    auth.require(UserAuth(username), AdminAuth())
    _require_user(db, username)
    _require_category(categories, category)

    return DataResponse(
        data=_rows_to_response(service.list_for_user(username, category=category)),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get(
    "/groups/{name}/transactions",
    response_model=DataResponse[list[TransactionResponse]],
)
def get_transactions_by_group(
    name: str,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    groups: Annotated[GroupService, Depends(get_group_service)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Get the transactions of every member of a group."""
    group = groups.get_group(name)
    auth.require(GroupAuth(group.member_emails), AdminAuth())

    return DataResponse(
        data=_rows_to_response(service.list_for_group(group)),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get(
    "/groups/{name}/transactions/category/{category}",
    response_model=DataResponse[list[TransactionResponse]],
)
def get_transactions_by_group_by_category(
    name: str,
    category: str,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    groups: Annotated[GroupService, Depends(get_group_service)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Get the transactions of a group's members in one category."""
    group = groups.get_group(name)
    auth.require(GroupAuth(group.member_emails), AdminAuth())
    _require_category(categories, category)

    return DataResponse(
        data=_rows_to_response(service.list_for_group(group, category=category)),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.delete("/users/{username}/transactions", response_model=DataResponse[MessageData])
def delete_transaction(
    username: str,
    transaction_data: TransactionDelete,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Delete one transaction. Regular users may only delete their own."""
    result = auth.require(UserAuth(username), AdminAuth())

    transaction = service.get_transaction(transaction_data.id)
    if not result.is_admin and transaction.username != username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Transaction belongs to another user",
        )

    service.delete_transaction(transaction)
    return DataResponse(
        data=MessageData(message="Transaction deleted"),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.delete("/transactions", response_model=DataResponse[MessageData])
def delete_transactions(
    transaction_data: TransactionsDelete,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Delete several transactions; none are deleted if any id is unknown (admin only)."""
    auth.require(AdminAuth())
    deleted = service.delete_transactions(transaction_data.ids)
    return DataResponse(
        data=MessageData(message=f"{deleted} transactions deleted"),
        refreshed_token_message=auth.refreshed_token_message,
    )
