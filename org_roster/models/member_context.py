"""Member context for request authorization."""

from dataclasses import dataclass
from typing import Union

from org_roster.models.member import Member
from org_roster.models.role import Capability, PermissionSet, RoleName, assignable_roles
from org_roster.models.role_assignment import (
    Assigned,
    RoleAssignment,
    assignment_can_manage,
    effective_permissions,
)


@dataclass
class MemberContext:
    """
    Authenticated member plus their resolved role assignment.

    Built once per request by the get_member_context dependency. The
    assignment is resolved eagerly, so a stale role string fails the request
    before any permission decision is made.

    Attributes:
        member: The authenticated Member row
        assignment: The member's role, or UNASSIGNED for rejected applicants
    """

    member: Member
    assignment: RoleAssignment

    @property
    def role(self) -> RoleName | None:
        if isinstance(self.assignment, Assigned):
            return self.assignment.role
        return None

    @property
    def permissions(self) -> PermissionSet:
        return effective_permissions(self.assignment)

    def has_permission(self, capability: Union[Capability, str]) -> bool:
        """Rejected members hold no capabilities."""
        return self.permissions.allows(capability)

    def can_manage(self, target: RoleAssignment) -> bool:
        """Check if this member strictly outranks the target assignment."""
        return assignment_can_manage(self.assignment, target)

    def assignable_roles(self) -> list[RoleName]:
        if self.role is None:
            return []
        return assignable_roles(self.role)

    def is_site_admin(self) -> bool:
        return self.role == RoleName.DATA_SYSTEMS_OFFICER

    def __repr__(self) -> str:
        role = self.role.value if self.role else None
        return f"<MemberContext(member_id={self.member.id}, role={role!r})>"
