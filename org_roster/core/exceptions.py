class OrgRosterException(Exception):
    """Base exception for the org roster"""

    pass


class UnauthorizedException(OrgRosterException):
    """Raised when JWT validation fails"""

    pass


class NotFoundException(OrgRosterException):
    """Raised when resource not found"""

    pass


class ForbiddenException(OrgRosterException):
    """Raised when a member lacks the capability or rank for an action"""

    pass


class ValidationException(OrgRosterException):
    """Raised for business logic validation errors"""

    pass


class UnknownRoleException(OrgRosterException):
    """
    Raised when a role name outside the closed enumeration is looked up.

    Indicates a data-integrity problem (e.g. a stale role string in the
    members table). Permission decisions fail closed on this error.
    """

    def __init__(self, role: object):
        self.role = role
        super().__init__(f"Unknown role: {role!r}")


class UnknownCapabilityException(OrgRosterException):
    """Raised when a capability flag outside the permission set is requested"""

    def __init__(self, capability: object):
        self.capability = capability
        super().__init__(f"Unknown capability: {capability!r}")
