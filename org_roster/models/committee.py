"""Committee model."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING, Optional

from org_roster.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from org_roster.models.member import Member
    from org_roster.models.committee_membership import CommitteeMembership


class Committee(Base, TimestampMixin):
    """
    Standing committee of the organization.

    chair_id is NULL while no chair is assigned and always NULL for an
    inactive committee (enforced at the service layer).
    """

    __tablename__ = "committees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    chair_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("members.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    chair: Mapped[Optional["Member"]] = relationship("Member", foreign_keys=[chair_id])
    memberships: Mapped[list["CommitteeMembership"]] = relationship(
        "CommitteeMembership",
        back_populates="committee",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Committee(id={self.id}, name='{self.name}', active={self.is_active})>"
