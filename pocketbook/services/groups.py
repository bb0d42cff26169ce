"""Group membership service."""

import logging
from dataclasses import dataclass, field

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from pocketbook.models.group import Group, GroupMember
from pocketbook.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class MemberSort:
    """Requested emails split by eligibility."""

    eligible: list[User] = field(default_factory=list)
    already_in_group: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)


class GroupService:
    """Service for group operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_group(self, name: str) -> Group:
        group = self.db.query(Group).filter(Group.name == name).first()
        if group is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
        return group

    def list_groups(self) -> list[Group]:
        return self.db.query(Group).order_by(Group.id).all()

    def sort_emails(self, emails: list[str]) -> MemberSort:
        """Split emails into users that can join, users already grouped and unknown emails.

        A user may belong to one group only.
        """
        result = MemberSort()
        for email in dict.fromkeys(emails):
            user = self.db.query(User).filter(User.email == email).first()
            if user is None:
                result.not_found.append(email)
                continue
            membership = self.db.query(GroupMember.id).filter(GroupMember.email == email).first()
            if membership is not None:
                result.already_in_group.append(email)
            else:
                result.eligible.append(user)
        return result

    def create_group(self, name: str, emails: list[str]) -> tuple[Group, MemberSort]:
        if self.db.query(Group.id).filter(Group.name == name).first() is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Group already exists"
            )

        sorted_emails = self._require_eligible(emails)
        group = Group(name=name)
        self.db.add(group)
        self._append_members(group, sorted_emails.eligible)
        self.db.commit()
        self.db.refresh(group)

        logger.info(f"Created group '{name}' with {len(group.members)} members")
        return group, sorted_emails

    def add_members(self, group: Group, emails: list[str]) -> MemberSort:
        sorted_emails = self._require_eligible(emails)
        self._append_members(group, sorted_emails.eligible)
        self.db.commit()
        self.db.refresh(group)
        return sorted_emails

    def delete_group(self, group: Group) -> None:
        name = group.name
        self.db.delete(group)
        self.db.commit()
        logger.info(f"Deleted group '{name}'")

    def _require_eligible(self, emails: list[str]) -> MemberSort:
        sorted_emails = self.sort_emails(emails)
        if not sorted_emails.eligible:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="All the member emails either do not exist or are already in a group",
            )
        return sorted_emails

    def _append_members(self, group: Group, users: list[User]) -> None:
        for user in users:
            group.members.append(GroupMember(user_id=user.id, email=user.email))
