from sqlalchemy.orm import Session
from org_roster.models.member import Member
from org_roster.models.role import RoleName


class MemberRepository:
    """Repository for Member model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_auth_id(self, auth_user_id: str) -> Member | None:
        """Get member by identity provider user id"""
        return self.db.query(Member).filter(Member.auth_user_id == auth_user_id).first()

    def get_by_id(self, member_id: int) -> Member | None:
        """Get member by internal ID"""
        return self.db.query(Member).filter(Member.id == member_id).first()

    def count(self) -> int:
        return self.db.query(Member).count()

    def list_all(self) -> list[Member]:
        """All members ordered by last name, then first name"""
        return (
            self.db.query(Member)
            .order_by(Member.last_name, Member.first_name, Member.id)
            .all()
        )

    def list_active(self) -> list[Member]:
        """
        Members shown in the directory.

        Pending applicants are active too, so they are filtered out by role.
        """
        return (
            self.db.query(Member)
            .filter(
                Member.is_active.is_(True),
                Member.role.is_not(None),
                Member.role != RoleName.PENDING_USER.value,
            )
            .order_by(Member.last_name, Member.first_name, Member.id)
            .all()
        )

    def create(self, member: Member) -> Member:
        """
        Create a new member.

        Raises:
            IntegrityError: If auth_user_id already exists
        """
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        return member

    def update(self, member: Member) -> Member:
        """Persist pending changes on a member"""
        self.db.commit()
        self.db.refresh(member)
        return member
