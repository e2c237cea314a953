"""
Organization roles and the static role registry.

Every role carries a priority rank and a fixed set of capability flags. A
member's effective permissions are always exactly the set attached to their
current role; nothing is granted per member.

Role Hierarchy (highest to lowest priority):
7. DATA_SYSTEMS_OFFICER - Site administrator, full capabilities
6. DEAN
5. PROGRAM_MANAGER
4. PRESIDENT
3. VICE_PRESIDENT
2. FINANCE_OFFICER / INTERNAL_AFFAIRS_OFFICER - Officers, partial capabilities
1. MEMBER - Dashboard access only
0. PENDING_USER / INACTIVE_MEMBER - Awaiting approval / deactivated
"""

from dataclasses import dataclass, fields
from enum import Enum as PyEnum
from types import MappingProxyType
from typing import Mapping, Union

from org_roster.core.exceptions import UnknownCapabilityException, UnknownRoleException


class RoleName(str, PyEnum):
    """Closed set of organization roles (exact-match, case-sensitive)."""

    PENDING_USER = "Pending User"
    INACTIVE_MEMBER = "Inactive Member"
    MEMBER = "Member"
    FINANCE_OFFICER = "Finance Officer"
    INTERNAL_AFFAIRS_OFFICER = "Internal Affairs Officer"
    VICE_PRESIDENT = "Vice President"
    PRESIDENT = "President"
    PROGRAM_MANAGER = "Program Manager"
    DEAN = "Dean"
    DATA_SYSTEMS_OFFICER = "Data & Systems Officer"


class Capability(str, PyEnum):
    """Capability flags carried by every permission set."""

    VIEW_DASHBOARD = "view_dashboard"
    APPROVE_ATTENDANCE = "approve_attendance"
    CREATE_ATTENDANCE = "create_attendance"
    APPROVE_FUNDS = "approve_funds"
    APPROVE_VOLUNTEERING = "approve_volunteering"
    MANAGE_SITE = "manage_site"
    APPROVE_MEMBERS = "approve_members"
    CREATE_VOLUNTEERING = "create_volunteering"
    CREATE_COMMITTEES = "create_committees"
    MANAGE_COMMITTEES = "manage_committees"


@dataclass(frozen=True)
class PermissionSet:
    """Immutable record of the ten capability flags."""

    view_dashboard: bool = False
    approve_attendance: bool = False
    create_attendance: bool = False
    approve_funds: bool = False
    approve_volunteering: bool = False
    manage_site: bool = False
    approve_members: bool = False
    create_volunteering: bool = False
    create_committees: bool = False
    manage_committees: bool = False

    @classmethod
    def granting(cls, *capabilities: Capability) -> "PermissionSet":
        """Build a set where only the given capabilities are enabled."""
        return cls(**{capability.value: True for capability in capabilities})

    def allows(self, capability: Union[Capability, str]) -> bool:
        return getattr(self, coerce_capability(capability).value)

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class RoleDefinition:
    name: RoleName
    priority: int
    permissions: PermissionSet


NO_PERMISSIONS = PermissionSet()
ALL_PERMISSIONS = PermissionSet.granting(*Capability)

_OFFICER_BASE = (
    Capability.VIEW_DASHBOARD,
    Capability.APPROVE_MEMBERS,
    Capability.CREATE_COMMITTEES,
    Capability.MANAGE_COMMITTEES,
)


def _define(name: RoleName, priority: int, permissions: PermissionSet) -> tuple[RoleName, RoleDefinition]:
    return name, RoleDefinition(name=name, priority=priority, permissions=permissions)


ROLE_DEFINITIONS: Mapping[RoleName, RoleDefinition] = MappingProxyType(
    dict(
        [
            _define(RoleName.PENDING_USER, 0, NO_PERMISSIONS),
            _define(
                RoleName.INACTIVE_MEMBER,
                0,
                PermissionSet.granting(Capability.VIEW_DASHBOARD),
            ),
            _define(RoleName.MEMBER, 1, PermissionSet.granting(Capability.VIEW_DASHBOARD)),
            _define(
                RoleName.FINANCE_OFFICER,
                2,
                PermissionSet.granting(*_OFFICER_BASE, Capability.APPROVE_FUNDS),
            ),
            _define(
                RoleName.INTERNAL_AFFAIRS_OFFICER,
                2,
                PermissionSet.granting(
                    *_OFFICER_BASE,
                    Capability.APPROVE_ATTENDANCE,
                    Capability.CREATE_ATTENDANCE,
                    Capability.APPROVE_VOLUNTEERING,
                    Capability.CREATE_VOLUNTEERING,
                ),
            ),
            _define(RoleName.VICE_PRESIDENT, 3, ALL_PERMISSIONS),
            _define(RoleName.PRESIDENT, 4, ALL_PERMISSIONS),
            _define(RoleName.PROGRAM_MANAGER, 5, ALL_PERMISSIONS),
            _define(RoleName.DEAN, 6, ALL_PERMISSIONS),
            _define(RoleName.DATA_SYSTEMS_OFFICER, 7, ALL_PERMISSIONS),
        ]
    )
)

# Reached only through the dedicated deactivate action
NON_ASSIGNABLE_ROLES = frozenset({RoleName.INACTIVE_MEMBER})


def coerce_role(role: Union[RoleName, str]) -> RoleName:
    """
    Resolve a role name to its enum member.

    Raises:
        UnknownRoleException: If the name is not one of the ten roles
    """
    if isinstance(role, RoleName):
        return role
    try:
        return RoleName(role)
    except ValueError:
        raise UnknownRoleException(role) from None


def coerce_capability(capability: Union[Capability, str]) -> Capability:
    if isinstance(capability, Capability):
        return capability
    try:
        return Capability(capability)
    except ValueError:
        raise UnknownCapabilityException(capability) from None


def definition_of(role: Union[RoleName, str]) -> RoleDefinition:
    return ROLE_DEFINITIONS[coerce_role(role)]


def permissions_of(role: Union[RoleName, str]) -> PermissionSet:
    """Permission set attached to a role."""
    return definition_of(role).permissions


def priority_of(role: Union[RoleName, str]) -> int:
    """Priority rank of a role (higher means more authority)."""
    return definition_of(role).priority


def has_permission(role: Union[RoleName, str], capability: Union[Capability, str]) -> bool:
    return permissions_of(role).allows(capability)


def can_manage(acting_role: Union[RoleName, str], target_role: Union[RoleName, str]) -> bool:
    """
    Check whether acting_role outranks target_role.

    Strict comparison: a role never manages a peer of equal priority,
    including itself.
    """
    return priority_of(acting_role) > priority_of(target_role)


def assignable_roles(acting_role: Union[RoleName, str]) -> list[RoleName]:
    """
    Roles an administrator holding acting_role may hand out.

    Returns every role with strictly lower priority, minus the roles that
    have their own dedicated action, highest priority first. Roles of equal
    priority keep their declaration order.
    """
    acting_priority = priority_of(acting_role)
    candidates = [
        definition
        for definition in ROLE_DEFINITIONS.values()
        if definition.priority < acting_priority and definition.name not in NON_ASSIGNABLE_ROLES
    ]
    return [d.name for d in sorted(candidates, key=lambda d: -d.priority)]


def all_roles() -> list[RoleName]:
    """All roles in declaration order."""
    return list(ROLE_DEFINITIONS)


def roles_by_priority() -> list[RoleName]:
    """All roles, lowest priority first."""
    return sorted(ROLE_DEFINITIONS, key=lambda name: ROLE_DEFINITIONS[name].priority)
