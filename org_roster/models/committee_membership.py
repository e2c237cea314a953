"""Committee membership model linking members to committees."""

from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from org_roster.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from org_roster.models.member import Member
    from org_roster.models.committee import Committee

CHAIR_ROLE = "Chair"
MEMBER_ROLE = "Member"


class CommitteeMembership(Base, TimestampMixin):
    """
    Join table recording which members serve on which committee.

    The role here is a free-text committee position ("Chair", "Secretary",
    "Member", ...) and is unrelated to the organization role registry.
    created_at doubles as the join date.

    Constraints:
    - Unique(committee_id, member_id) - one seat per member per committee
    """

    __tablename__ = "committee_memberships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    committee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("committees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    member_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(100), nullable=False, default=MEMBER_ROLE)

    # Relationships
    committee: Mapped["Committee"] = relationship("Committee", back_populates="memberships")
    member: Mapped["Member"] = relationship("Member", back_populates="committee_memberships")

    # Constraints
    __table_args__ = (
        UniqueConstraint("committee_id", "member_id", name="uq_committee_member"),
    )

    def __repr__(self) -> str:
        return (
            f"<CommitteeMembership(committee_id={self.committee_id}, "
            f"member_id={self.member_id}, role='{self.role}')>"
        )
