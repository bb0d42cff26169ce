"""Group schemas."""

from pydantic import BaseModel, ConfigDict, Field

from pocketbook.schemas.common import NonBlankStr, RequiredEmail


class GroupCreate(BaseModel):
    """Create a group from member emails."""

    name: NonBlankStr = Field(..., max_length=255)
    member_emails: list[RequiredEmail] = Field(..., min_length=1)


class GroupAddMembers(BaseModel):
    """Add members to an existing group."""

    member_emails: list[RequiredEmail] = Field(..., min_length=1)


class GroupDelete(BaseModel):
    """Delete a group by name."""

    name: NonBlankStr


class GroupMemberResponse(BaseModel):
    """Group member."""

    model_config = ConfigDict(from_attributes=True)

    email: str


class GroupResponse(BaseModel):
    """Group with its members."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    members: list[GroupMemberResponse]


class GroupMembershipResult(BaseModel):
    """Group after a membership change, plus the emails that were skipped."""

    group: GroupResponse
    already_in_group: list[str]
    members_not_found: list[str]
