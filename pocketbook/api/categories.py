"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from pocketbook.api.dependencies import (
    Authorizer,
    get_authorizer,
    get_category_service,
    get_session_user,
)
from pocketbook.models.user import User
from pocketbook.schemas.category import (
    CategoryCreate,
    CategoryDelete,
    CategoryResponse,
    CategoryUpdate,
    CountData,
)
from pocketbook.schemas.common import DataResponse
from pocketbook.services.categories import CategoryService
from pocketbook.services.verifier import AdminAuth, UserAuth

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.post(
    "",
    response_model=DataResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    category_data: CategoryCreate,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Create a new category (admin only)."""
    auth.require(AdminAuth())
    category = service.create_category(category_data.type, category_data.color)
    return DataResponse(
        data=CategoryResponse.model_validate(category),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.patch("/{category_type}", response_model=DataResponse[CountData])
def update_category(
    category_type: str,
    category_data: CategoryUpdate,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Change a category's type and color; its transactions follow the new type."""
    auth.require(AdminAuth())
    count = service.update_category(category_type, category_data.type, category_data.color)
    return DataResponse(
        data=CountData(count=count),
        message="Category edited successfully",
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.delete("", response_model=DataResponse[CountData])
def delete_categories(
    category_data: CategoryDelete,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Delete categories, moving their transactions to a remaining category."""
    auth.require(AdminAuth())
    count, fallback = service.delete_categories(category_data.types)
    return DataResponse(
        data=CountData(count=count),
        message=f"Categories deleted, {count} transactions moved to '{fallback.type}'",
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get("", response_model=DataResponse[list[CategoryResponse]])
def get_categories(
    current_user: Annotated[User, Depends(get_session_user)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Get all categories."""
    auth.require(UserAuth(current_user.username), AdminAuth())
    return DataResponse(
        data=[CategoryResponse.model_validate(c) for c in service.list_categories()],
        refreshed_token_message=auth.refreshed_token_message,
    )
