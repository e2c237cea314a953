import logging

from sqlalchemy.orm import Session
from org_roster.models.committee import Committee
from org_roster.models.committee_membership import CHAIR_ROLE, MEMBER_ROLE, CommitteeMembership
from org_roster.models.member_context import MemberContext
from org_roster.models.role import Capability
from org_roster.models.role_assignment import can_serve_on_committees
from org_roster.repositories.committee_repository import CommitteeRepository
from org_roster.repositories.committee_membership_repository import CommitteeMembershipRepository
from org_roster.repositories.member_repository import MemberRepository
from org_roster.schemas.committee_schemas import (
    CommitteeCreate,
    CommitteeUpdate,
    CommitteeSeatCreate,
)
from org_roster.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
)

logger = logging.getLogger("org_roster")


class CommitteeService:
    """Service layer for committees and their seats"""

    def __init__(self, db: Session):
        self.db = db
        self.committee_repo = CommitteeRepository(db)
        self.seat_repo = CommitteeMembershipRepository(db)
        self.member_repo = MemberRepository(db)

    def list_committees(self, context: MemberContext, include_inactive: bool = True) -> list[Committee]:
        self._require(context, Capability.VIEW_DASHBOARD, "Committees require dashboard access")
        return self.committee_repo.list_all(include_inactive=include_inactive)

    def get_committee(self, committee_id: int, context: MemberContext) -> Committee:
        """
        Raises:
            NotFoundException: If committee not found
        """
        self._require(context, Capability.VIEW_DASHBOARD, "Committees require dashboard access")
        return self._get(committee_id)

    def create_committee(self, data: CommitteeCreate, context: MemberContext) -> Committee:
        """
        Create a committee (CREATE_COMMITTEES).

        Raises:
            ForbiddenException: If caller cannot create committees
            ValidationException: If the name is taken
        """
        self._require(context, Capability.CREATE_COMMITTEES, "Not allowed to create committees")
        if self.committee_repo.get_by_name(data.name):
            raise ValidationException(f"Committee '{data.name}' already exists")

        committee = self.committee_repo.create(
            Committee(name=data.name, description=data.description, is_active=True)
        )
        logger.info("Member %s created committee %s", context.member.id, committee.id)
        return committee

    def update_committee(
        self, committee_id: int, data: CommitteeUpdate, context: MemberContext
    ) -> Committee:
        """
        Update committee details (MANAGE_COMMITTEES).

        Deactivating a committee also clears its chair.
        """
        self._require(context, Capability.MANAGE_COMMITTEES, "Not allowed to manage committees")
        committee = self._get(committee_id)

        if data.name is not None and data.name != committee.name:
            if self.committee_repo.get_by_name(data.name):
                raise ValidationException(f"Committee '{data.name}' already exists")
            committee.name = data.name
        if data.description is not None:
            committee.description = data.description
        if data.is_active is not None:
            committee.is_active = data.is_active
            if not data.is_active:
                self._vacate_chair(committee)

        return self.committee_repo.update(committee)

    def assign_chair(self, committee_id: int, member_id: int, context: MemberContext) -> Committee:
        """
        Make a member the committee chair (MANAGE_COMMITTEES).

        The chair also gets (or is moved to) a seat with the Chair position,
        and the outgoing chair's seat drops back to Member.

        Raises:
            ForbiddenException: If caller cannot manage committees
            NotFoundException: If committee or member not found
            ValidationException: If committee inactive or member not an active member
        """
        self._require(context, Capability.MANAGE_COMMITTEES, "Not allowed to manage committees")
        committee = self._get(committee_id)
        if not committee.is_active:
            raise ValidationException("Inactive committees cannot have a chair")

        chair = self._get_eligible_member(member_id)

        if committee.chair_id != chair.id:
            self._vacate_chair(committee)

        seat = self.seat_repo.get_membership(chair.id, committee.id)
        if seat:
            seat.role = CHAIR_ROLE
        else:
            committee.memberships.append(CommitteeMembership(member_id=chair.id, role=CHAIR_ROLE))

        committee.chair_id = chair.id
        committee = self.committee_repo.update(committee)
        logger.info(
            "Member %s assigned member %s as chair of committee %s",
            context.member.id,
            chair.id,
            committee.id,
        )
        return committee

    def add_seat(
        self, committee_id: int, data: CommitteeSeatCreate, context: MemberContext
    ) -> CommitteeMembership:
        """
        Add a member to a committee (MANAGE_COMMITTEES).

        Raises:
            ValidationException: If the member already serves on the committee
        """
        self._require(context, Capability.MANAGE_COMMITTEES, "Not allowed to manage committees")
        committee = self._get(committee_id)
        member = self._get_eligible_member(data.member_id)

        if self.seat_repo.get_membership(member.id, committee.id):
            raise ValidationException("Member already serves on this committee")

        return self.seat_repo.create(
            CommitteeMembership(committee_id=committee.id, member_id=member.id, role=data.role)
        )

    def remove_seat(self, committee_id: int, member_id: int, context: MemberContext) -> None:
        """Remove a member from a committee; removing the chair vacates the chair"""
        self._require(context, Capability.MANAGE_COMMITTEES, "Not allowed to manage committees")
        committee = self._get(committee_id)

        seat = self.seat_repo.get_membership(member_id, committee.id)
        if not seat:
            raise NotFoundException("Member does not serve on this committee")

        if committee.chair_id == member_id:
            committee.chair_id = None
            self.committee_repo.update(committee)
        self.seat_repo.delete(seat)

    def list_seats(self, committee_id: int, context: MemberContext) -> list[CommitteeMembership]:
        self._require(context, Capability.VIEW_DASHBOARD, "Committees require dashboard access")
        committee = self._get(committee_id)
        return self.seat_repo.get_committee_members(committee.id)

    def list_own_seats(self, context: MemberContext) -> list[CommitteeMembership]:
        return self.seat_repo.get_member_committees(context.member.id)

    def delete_committee(self, committee_id: int, context: MemberContext) -> None:
        """Delete committee and all its seats (MANAGE_COMMITTEES)"""
        self._require(context, Capability.MANAGE_COMMITTEES, "Not allowed to manage committees")
        committee = self._get(committee_id)
        self.committee_repo.delete(committee)
        logger.info("Member %s deleted committee %s", context.member.id, committee_id)

    def _get(self, committee_id: int) -> Committee:
        committee = self.committee_repo.get_by_id(committee_id)
        if not committee:
            raise NotFoundException("Committee not found")
        return committee

    def _vacate_chair(self, committee: Committee) -> None:
        """Clear the chair and demote their seat; the caller commits."""
        if committee.chair_id is None:
            return
        seat = self.seat_repo.get_membership(committee.chair_id, committee.id)
        if seat and seat.role == CHAIR_ROLE:
            seat.role = MEMBER_ROLE
        committee.chair_id = None

    def _get_eligible_member(self, member_id: int):
        """Only active members holding a real role may serve on committees."""
        member = self.member_repo.get_by_id(member_id)
        if not member:
            raise NotFoundException("Member not found")

        if not member.is_active or not can_serve_on_committees(member.assignment):
            raise ValidationException("Only active members can serve on committees")
        return member

    @staticmethod
    def _require(context: MemberContext, capability: Capability, message: str) -> None:
        if not context.has_permission(capability):
            raise ForbiddenException(message)
