"""Group API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from pocketbook.api.dependencies import (
    Authorizer,
    get_authorizer,
    get_group_service,
    get_session_user,
)
from pocketbook.models.group import Group
from pocketbook.models.user import User
from pocketbook.schemas.common import DataResponse, MessageData
from pocketbook.schemas.group import (
    GroupAddMembers,
    GroupCreate,
    GroupDelete,
    GroupMembershipResult,
    GroupResponse,
)
from pocketbook.services.groups import GroupService, MemberSort
from pocketbook.services.verifier import AdminAuth, GroupAuth, UserAuth

router = APIRouter(prefix="/api/groups", tags=["groups"])


def _membership_result(group: Group, sorted_emails: MemberSort) -> GroupMembershipResult:
    return GroupMembershipResult(
        group=GroupResponse.model_validate(group),
        already_in_group=sorted_emails.already_in_group,
        members_not_found=sorted_emails.not_found,
    )


@router.post(
    "",
    response_model=DataResponse[GroupMembershipResult],
    status_code=status.HTTP_201_CREATED,
)
def create_group(
    group_data: GroupCreate,
    current_user: Annotated[User, Depends(get_session_user)],
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[GroupService, Depends(get_group_service)],
):
    """Create a group from a list of member emails."""
    auth.require(UserAuth(current_user.username))
    group, sorted_emails = service.create_group(group_data.name, group_data.member_emails)
    return DataResponse(
        data=_membership_result(group, sorted_emails),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get("", response_model=DataResponse[list[GroupResponse]])
def get_groups(
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[GroupService, Depends(get_group_service)],
):
    """Get all groups (admin only)."""
    auth.require(AdminAuth())
    return DataResponse(
        data=[GroupResponse.model_validate(group) for group in service.list_groups()],
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.get("/{name}", response_model=DataResponse[GroupResponse])
def get_group(
    name: str,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[GroupService, Depends(get_group_service)],
):
    """Get a group. Visible to its members and to admins."""
    group = service.get_group(name)
    auth.require(GroupAuth(group.member_emails), AdminAuth())
    return DataResponse(
        data=GroupResponse.model_validate(group),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.patch("/{name}/add", response_model=DataResponse[GroupMembershipResult])
def add_to_group(
    name: str,
    group_data: GroupAddMembers,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[GroupService, Depends(get_group_service)],
):
    """Add members to a group."""
    group = service.get_group(name)
    auth.require(GroupAuth(group.member_emails), AdminAuth())
    sorted_emails = service.add_members(group, group_data.member_emails)
    return DataResponse(
        data=_membership_result(group, sorted_emails),
        refreshed_token_message=auth.refreshed_token_message,
    )


@router.delete("", response_model=DataResponse[MessageData])
def delete_group(
    group_data: GroupDelete,
    auth: Annotated[Authorizer, Depends(get_authorizer)],
    service: Annotated[GroupService, Depends(get_group_service)],
):
    """Delete a group. Allowed to its members and to admins."""
    group = service.get_group(group_data.name)
    auth.require(GroupAuth(group.member_emails), AdminAuth())
    service.delete_group(group)
    return DataResponse(
        data=MessageData(message="Group deleted"),
        refreshed_token_message=auth.refreshed_token_message,
    )
