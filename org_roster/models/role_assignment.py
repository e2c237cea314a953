"""Explicit representation of a member's stored role."""

from dataclasses import dataclass
from typing import Union

from org_roster.models.role import (
    NO_PERMISSIONS,
    PermissionSet,
    RoleName,
    coerce_role,
    permissions_of,
    priority_of,
)

# Ranks below every role in the registry
UNASSIGNED_PRIORITY = -1


@dataclass(frozen=True)
class Assigned:
    """Member holds one of the registry roles."""

    role: RoleName


@dataclass(frozen=True)
class Unassigned:
    """Rejected applicant: no role and no permissions."""


RoleAssignment = Union[Assigned, Unassigned]

UNASSIGNED = Unassigned()


def assignment_from_value(value: str | None) -> RoleAssignment:
    """
    Convert a stored role column value into a RoleAssignment.

    A missing role always means the member was rejected; it never falls back
    to MEMBER.

    Raises:
        UnknownRoleException: If the stored string is not a known role
    """
    if value is None:
        return UNASSIGNED
    return Assigned(coerce_role(value))


def assignment_to_value(assignment: RoleAssignment) -> str | None:
    if isinstance(assignment, Assigned):
        return assignment.role.value
    return None


def effective_permissions(assignment: RoleAssignment) -> PermissionSet:
    if isinstance(assignment, Assigned):
        return permissions_of(assignment.role)
    return NO_PERMISSIONS


def effective_priority(assignment: RoleAssignment) -> int:
    if isinstance(assignment, Assigned):
        return priority_of(assignment.role)
    return UNASSIGNED_PRIORITY


def assignment_can_manage(acting: RoleAssignment, target: RoleAssignment) -> bool:
    """Like can_manage, but rejected members rank below every role."""
    if isinstance(acting, Unassigned):
        return False
    return effective_priority(acting) > effective_priority(target)


def is_active_for(assignment: RoleAssignment) -> bool:
    """Active flag that must accompany a role: false for inactive or rejected members."""
    if isinstance(assignment, Unassigned):
        return False
    return assignment.role != RoleName.INACTIVE_MEMBER


def can_serve_on_committees(assignment: RoleAssignment) -> bool:
    """Committee seats and chairs are held by active members past approval."""
    if not is_active_for(assignment):
        return False
    return assignment.role != RoleName.PENDING_USER
