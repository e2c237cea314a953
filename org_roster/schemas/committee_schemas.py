from datetime import datetime
from pydantic import BaseModel, Field


class CommitteeCreate(BaseModel):
    """Schema for creating a committee"""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)


class CommitteeUpdate(BaseModel):
    """Schema for updating a committee; deactivating clears the chair"""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    is_active: bool | None = None


class CommitteeResponse(BaseModel):
    id: int
    name: str
    description: str
    chair_id: int | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommitteeListResponse(BaseModel):
    committees: list[CommitteeResponse]
    total: int


class ChairAssignment(BaseModel):
    member_id: int


class CommitteeSeatCreate(BaseModel):
    """Add a member to a committee"""

    member_id: int
    role: str = Field(default="Member", min_length=1, max_length=100)


class CommitteeSeatResponse(BaseModel):
    """A member's seat on a committee"""

    id: int
    committee_id: int
    member_id: int
    role: str
    joined_at: datetime = Field(validation_alias="created_at")

    model_config = {"from_attributes": True, "populate_by_name": True}
