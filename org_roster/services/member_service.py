import logging

from sqlalchemy.orm import Session
from org_roster.models.member import Member
from org_roster.models.member_context import MemberContext
from org_roster.models.role import Capability, RoleName
from org_roster.models.role_assignment import (
    Assigned,
    RoleAssignment,
    UNASSIGNED,
    Unassigned,
    can_serve_on_committees,
)
from org_roster.repositories.committee_repository import CommitteeRepository
from org_roster.repositories.member_repository import MemberRepository
from org_roster.schemas.member_schemas import MemberProfileUpdate
from org_roster.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
)

logger = logging.getLogger("org_roster")


class MemberService:
    """Service layer for member registration and moderation"""

    def __init__(self, db: Session):
        self.db = db
        self.member_repo = MemberRepository(db)
        self.committee_repo = CommitteeRepository(db)

    def get_or_register(self, auth_user_id: str) -> Member:
        """
        Get member by auth_user_id, registering them on first contact.

        New members start as PENDING_USER. The first member of an empty
        roster becomes DATA_SYSTEMS_OFFICER so that someone can approve the
        rest.

        Args:
            auth_user_id: 'sub' claim from the identity provider token

        Returns:
            Existing or newly created Member
        """
        member = self.member_repo.get_by_auth_id(auth_user_id)
        if member:
            return member

        role = RoleName.PENDING_USER
        if self.member_repo.count() == 0:
            role = RoleName.DATA_SYSTEMS_OFFICER

        member = Member(auth_user_id=auth_user_id)
        member.set_assignment(Assigned(role))
        member = self.member_repo.create(member)
        logger.info("Registered member %s as %s", member.id, role.value)
        return member

    def update_profile(self, data: MemberProfileUpdate, context: MemberContext) -> Member:
        """Update the caller's own profile fields"""
        member = context.member
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(member, field, value)
        return self.member_repo.update(member)

    def list_members(self, context: MemberContext) -> dict[str, list[Member]]:
        """
        List every member grouped by lifecycle state (APPROVE_MEMBERS).

        Returns:
            Dict with 'pending', 'active', 'inactive' and 'rejected' lists

        Raises:
            ForbiddenException: If caller cannot approve members
            UnknownRoleException: If any stored role is not a known role
        """
        self._require(context, Capability.APPROVE_MEMBERS, "Only member approvers can list members")

        groups: dict[str, list[Member]] = {
            "pending": [],
            "active": [],
            "inactive": [],
            "rejected": [],
        }
        for member in self.member_repo.list_all():
            assignment = member.assignment
            if isinstance(assignment, Unassigned):
                groups["rejected"].append(member)
            elif assignment.role == RoleName.PENDING_USER:
                groups["pending"].append(member)
            elif member.is_active:
                groups["active"].append(member)
            else:
                groups["inactive"].append(member)
        return groups

    def list_directory(self, context: MemberContext) -> list[Member]:
        """Active members visible to anyone with dashboard access"""
        self._require(context, Capability.VIEW_DASHBOARD, "Directory requires dashboard access")
        # Resolving each assignment surfaces stale role strings here
        return [m for m in self.member_repo.list_active() if isinstance(m.assignment, Assigned)]

    def approve(self, member_id: int, role: RoleName, context: MemberContext) -> Member:
        """
        Approve a pending applicant into a role.

        Raises:
            ForbiddenException: If caller cannot approve or cannot assign the role
            NotFoundException: If member not found
            ValidationException: If the member is not pending
        """
        self._require(context, Capability.APPROVE_MEMBERS, "Only member approvers can approve members")
        target = self._get_target(member_id)

        if target.assignment != Assigned(RoleName.PENDING_USER):
            raise ValidationException("Only pending applicants can be approved")
        if role == RoleName.PENDING_USER:
            raise ValidationException("Approval must assign a role other than Pending User")
        self._require_assignable(context, role)

        self._assign(target, Assigned(role))
        target = self.member_repo.update(target)
        logger.info("Member %s approved member %s as %s", context.member.id, target.id, role.value)
        return target

    def reject(self, member_id: int, context: MemberContext) -> Member:
        """
        Reject a pending applicant, clearing their role.

        Raises:
            ForbiddenException: If caller cannot approve members
            NotFoundException: If member not found
            ValidationException: If the member is not pending
        """
        self._require(context, Capability.APPROVE_MEMBERS, "Only member approvers can reject members")
        target = self._get_target(member_id)

        if target.assignment != Assigned(RoleName.PENDING_USER):
            raise ValidationException("Only pending applicants can be rejected")

        self._assign(target, UNASSIGNED)
        target = self.member_repo.update(target)
        logger.info("Member %s rejected member %s", context.member.id, target.id)
        return target

    def change_role(self, member_id: int, role: RoleName, context: MemberContext) -> Member:
        """
        Move an active member to another role.

        The caller must outrank both the member's current role and the new
        role.

        Raises:
            ForbiddenException: If caller lacks rank, or targets themselves
            NotFoundException: If member not found
            ValidationException: If the member is pending, inactive or rejected
        """
        self._require(context, Capability.APPROVE_MEMBERS, "Only member approvers can change roles")
        target = self._get_target(member_id)

        if target.id == context.member.id:
            raise ForbiddenException("Cannot change your own role")

        current = target.assignment
        if isinstance(current, Unassigned):
            raise ValidationException("Rejected members must be reactivated first")
        if current.role == RoleName.PENDING_USER:
            raise ValidationException("Pending applicants must be approved first")
        if current.role == RoleName.INACTIVE_MEMBER or not target.is_active:
            raise ValidationException("Inactive members must be reactivated first")

        if not context.can_manage(current):
            raise ForbiddenException(f"Cannot manage a member with role {current.role.value}")
        self._require_assignable(context, role)

        self._assign(target, Assigned(role))
        target = self.member_repo.update(target)
        logger.info(
            "Member %s changed member %s from %s to %s",
            context.member.id,
            target.id,
            current.role.value,
            role.value,
        )
        return target

    def deactivate(self, member_id: int, context: MemberContext) -> Member:
        """
        Move a member to INACTIVE_MEMBER.

        Raises:
            ForbiddenException: If caller lacks rank, or targets themselves
            NotFoundException: If member not found
            ValidationException: If the member is pending, rejected or already inactive
        """
        self._require(context, Capability.APPROVE_MEMBERS, "Only member approvers can deactivate members")
        target = self._get_target(member_id)

        if target.id == context.member.id:
            raise ForbiddenException("Cannot deactivate yourself")

        current = target.assignment
        if isinstance(current, Unassigned):
            raise ValidationException("Rejected members cannot be deactivated")
        if current.role == RoleName.PENDING_USER:
            raise ValidationException("Pending applicants are rejected, not deactivated")
        if current.role == RoleName.INACTIVE_MEMBER:
            raise ValidationException("Member is already inactive")
        if not context.can_manage(current):
            raise ForbiddenException(f"Cannot manage a member with role {current.role.value}")

        self._assign(target, Assigned(RoleName.INACTIVE_MEMBER))
        target = self.member_repo.update(target)
        logger.info("Member %s deactivated member %s", context.member.id, target.id)
        return target

    def reactivate(self, member_id: int, context: MemberContext) -> Member:
        """
        Return an inactive or rejected member to MEMBER.

        The member's permissions become exactly those of MEMBER; nothing
        from a previous role carries over.

        Raises:
            ForbiddenException: If caller cannot assign MEMBER
            NotFoundException: If member not found
            ValidationException: If the member is neither inactive nor rejected
        """
        self._require(context, Capability.APPROVE_MEMBERS, "Only member approvers can reactivate members")
        target = self._get_target(member_id)

        current = target.assignment
        if current != UNASSIGNED and current != Assigned(RoleName.INACTIVE_MEMBER):
            raise ValidationException("Only inactive or rejected members can be reactivated")
        self._require_assignable(context, RoleName.MEMBER)

        self._assign(target, Assigned(RoleName.MEMBER))
        target = self.member_repo.update(target)
        logger.info("Member %s reactivated member %s", context.member.id, target.id)
        return target

    def resign(self, context: MemberContext) -> Member:
        """
        Let the caller step down to INACTIVE_MEMBER.

        Any committee chairs they hold are vacated.

        Raises:
            ValidationException: If the caller is pending, rejected or already inactive
        """
        member = context.member
        current = context.assignment
        if isinstance(current, Unassigned):
            raise ValidationException("Rejected members cannot resign")
        if current.role == RoleName.PENDING_USER:
            raise ValidationException("Pending applicants cannot resign")
        if current.role == RoleName.INACTIVE_MEMBER:
            raise ValidationException("Member is already inactive")

        self._assign(member, Assigned(RoleName.INACTIVE_MEMBER))
        member = self.member_repo.update(member)
        logger.info("Member %s resigned from %s", member.id, current.role.value)
        return member

    def _assign(self, member: Member, assignment: RoleAssignment) -> None:
        """Set the role; members leaving active service lose their chairs in the same commit."""
        member.set_assignment(assignment)
        if not can_serve_on_committees(assignment):
            vacated = self.committee_repo.clear_chair_for(member.id)
            for committee in vacated:
                logger.info("Member %s no longer chairs committee %s", member.id, committee.id)

    def _get_target(self, member_id: int) -> Member:
        target = self.member_repo.get_by_id(member_id)
        if not target:
            raise NotFoundException("Member not found")
        return target

    @staticmethod
    def _require(context: MemberContext, capability: Capability, message: str) -> None:
        if not context.has_permission(capability):
            raise ForbiddenException(message)

    @staticmethod
    def _require_assignable(context: MemberContext, role: RoleName) -> None:
        if role not in context.assignable_roles():
            raise ForbiddenException(f"Not allowed to assign role {role.value}")
