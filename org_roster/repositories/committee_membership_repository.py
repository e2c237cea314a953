"""Repository for CommitteeMembership model operations."""

from sqlalchemy.orm import Session
from org_roster.models.committee_membership import CommitteeMembership


class CommitteeMembershipRepository:
    """Repository for CommitteeMembership model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_membership(self, member_id: int, committee_id: int) -> CommitteeMembership | None:
        """
        Get the seat a member holds on a specific committee.

        Args:
            member_id: Member ID
            committee_id: Committee ID

        Returns:
            CommitteeMembership object or None if not found
        """
        return (
            self.db.query(CommitteeMembership)
            .filter(
                CommitteeMembership.member_id == member_id,
                CommitteeMembership.committee_id == committee_id,
            )
            .first()
        )

    def get_committee_members(self, committee_id: int) -> list[CommitteeMembership]:
        """All seats on a committee, oldest first"""
        return (
            self.db.query(CommitteeMembership)
            .filter(CommitteeMembership.committee_id == committee_id)
            .order_by(CommitteeMembership.created_at, CommitteeMembership.id)
            .all()
        )

    def get_member_committees(self, member_id: int) -> list[CommitteeMembership]:
        """All committees a member serves on"""
        return (
            self.db.query(CommitteeMembership)
            .filter(CommitteeMembership.member_id == member_id)
            .order_by(CommitteeMembership.created_at, CommitteeMembership.id)
            .all()
        )

    def create(self, membership: CommitteeMembership) -> CommitteeMembership:
        """
        Create a new committee seat.

        Raises:
            IntegrityError: If (committee_id, member_id) already exists
        """
        self.db.add(membership)
        self.db.commit()
        self.db.refresh(membership)
        return membership

    def update(self, membership: CommitteeMembership) -> CommitteeMembership:
        self.db.commit()
        self.db.refresh(membership)
        return membership

    def delete(self, membership: CommitteeMembership) -> None:
        """Remove a member from a committee"""
        self.db.delete(membership)
        self.db.commit()
