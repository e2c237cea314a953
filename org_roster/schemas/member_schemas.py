from pydantic import BaseModel, Field
from datetime import datetime
from org_roster.models.role import RoleName
from org_roster.schemas.role_schemas import PermissionSetResponse


class MemberResponse(BaseModel):
    """Member record as seen by administrators"""

    id: int
    auth_user_id: str
    email: str | None
    first_name: str
    last_name: str
    display_name: str
    linkedin: str
    role: RoleName | None  # None for rejected applicants
    is_active: bool
    total_volunteer_hours: int
    current_volunteer_hours: int
    attendance_total: int
    is_attendance_exempt: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class NavigationItemResponse(BaseModel):
    key: str
    label: str

    model_config = {"from_attributes": True}


class MemberProfileResponse(MemberResponse):
    """Own profile with effective permissions and the navigation to render"""

    permissions: PermissionSetResponse
    navigation: list[NavigationItemResponse]


class MemberProfileUpdate(BaseModel):
    """Self-service profile changes (role and status are admin-only)"""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    linkedin: str | None = Field(None, max_length=255)


class MemberListResponse(BaseModel):
    """All members grouped by lifecycle state"""

    pending: list[MemberResponse]
    active: list[MemberResponse]
    inactive: list[MemberResponse]
    rejected: list[MemberResponse]
    total: int


class DirectoryEntryResponse(BaseModel):
    """Public directory entry visible to every active member"""

    id: int
    display_name: str
    email: str | None
    linkedin: str
    role: RoleName

    model_config = {"from_attributes": True}


class RoleAssignmentRequest(BaseModel):
    """Role to assign when approving or promoting a member"""

    role: RoleName = Field(..., description="Exact role name, case-sensitive")
