from pydantic import BaseModel, Field
from org_roster.models.role import RoleName


class PermissionSetResponse(BaseModel):
    """The ten capability flags of a role"""

    view_dashboard: bool
    approve_attendance: bool
    create_attendance: bool
    approve_funds: bool
    approve_volunteering: bool
    manage_site: bool
    approve_members: bool
    create_volunteering: bool
    create_committees: bool
    manage_committees: bool

    model_config = {"from_attributes": True}


class RoleDefinitionResponse(BaseModel):
    """One row of the role table"""

    name: RoleName
    priority: int = Field(..., ge=0)
    permissions: PermissionSetResponse

    model_config = {"from_attributes": True}


class AssignableRolesResponse(BaseModel):
    """Roles the caller may hand out, highest priority first"""

    acting_role: RoleName | None
    roles: list[RoleName]
