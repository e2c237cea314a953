from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from org_roster.models.base import Base, TimestampMixin
from org_roster.models.role import RoleName
from org_roster.models.role_assignment import (
    RoleAssignment,
    assignment_from_value,
    assignment_to_value,
    is_active_for,
)

if TYPE_CHECKING:
    from org_roster.models.committee_membership import CommitteeMembership


class Member(Base, TimestampMixin):
    """
    Organization member record.

    Identity lives with the external identity provider; this table stores
    only the 'sub' claim (auth_user_id) plus the roster profile. Auto-created
    with role PENDING_USER on first API request with a valid JWT.

    The role column is a plain string so that a stale or corrupted value is
    caught by the role registry (UnknownRoleException) instead of being
    silently coerced. NULL means the applicant was rejected.
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    auth_user_id: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    linkedin: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    role: Mapped[str | None] = mapped_column(
        String(50), nullable=True, default=RoleName.PENDING_USER.value, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    total_volunteer_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_volunteer_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    attendance_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_attendance_exempt: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    committee_memberships: Mapped[list["CommitteeMembership"]] = relationship(
        "CommitteeMembership",
        back_populates="member",
        cascade="all, delete-orphan",
    )

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def assignment(self) -> RoleAssignment:
        """Stored role as a RoleAssignment (raises UnknownRoleException if stale)"""
        return assignment_from_value(self.role)

    def set_assignment(self, assignment: RoleAssignment) -> None:
        """Set role and is_active together; the two never change independently."""
        self.role = assignment_to_value(assignment)
        self.is_active = is_active_for(assignment)

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, auth_user_id='{self.auth_user_id}', role={self.role!r})>"
