"""Group model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from pocketbook.database import Base
from pocketbook.models.mixins import TimestampMixin


class Group(Base, TimestampMixin):
    """A named set of users whose transactions can be viewed together."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    members = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupMember.id",
    )

    @property
    def member_emails(self) -> list[str]:
        """Emails of all members in insertion order."""
        return [member.email for member in self.members]


class GroupMember(Base):
    """Membership row. One group per user is checked on insert, not by the schema."""

    __tablename__ = "group_members"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)

    # Relationships
    group = relationship("Group", back_populates="members")
    user = relationship("User", backref="memberships")
