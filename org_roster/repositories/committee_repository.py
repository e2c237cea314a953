from sqlalchemy.orm import Session
from org_roster.models.committee import Committee
from org_roster.models.committee_membership import CHAIR_ROLE, MEMBER_ROLE, CommitteeMembership


class CommitteeRepository:
    """Repository for Committee model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, committee_id: int) -> Committee | None:
        return self.db.query(Committee).filter(Committee.id == committee_id).first()

    def get_by_name(self, name: str) -> Committee | None:
        return self.db.query(Committee).filter(Committee.name == name).first()

    def list_all(self, include_inactive: bool = True) -> list[Committee]:
        """List committees ordered by name"""
        query = self.db.query(Committee)
        if not include_inactive:
            query = query.filter(Committee.is_active.is_(True))
        return query.order_by(Committee.name).all()

    def clear_chair_for(self, member_id: int) -> list[Committee]:
        """
        Remove a member from every chair they hold.

        Their Chair seats drop back to ordinary Member seats. Changes are
        left in the session; the caller commits them together with the
        member's own update.

        Returns:
            Committees whose chair was cleared
        """
        committees = self.db.query(Committee).filter(Committee.chair_id == member_id).all()
        for committee in committees:
            committee.chair_id = None

        seats = (
            self.db.query(CommitteeMembership)
            .filter(
                CommitteeMembership.member_id == member_id,
                CommitteeMembership.role == CHAIR_ROLE,
            )
            .all()
        )
        for seat in seats:
            seat.role = MEMBER_ROLE
        return committees

    def create(self, committee: Committee) -> Committee:
        """Create new committee"""
        self.db.add(committee)
        self.db.commit()
        self.db.refresh(committee)
        return committee

    def update(self, committee: Committee) -> Committee:
        """Update existing committee"""
        self.db.commit()
        self.db.refresh(committee)
        return committee

    def delete(self, committee: Committee) -> None:
        """Delete committee (cascades to committee memberships)"""
        self.db.delete(committee)
        self.db.commit()
