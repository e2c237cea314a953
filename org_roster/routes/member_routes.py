from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from org_roster.database import get_db
from org_roster.dependencies import get_member_context
from org_roster.models.member_context import MemberContext
from org_roster.services.member_service import MemberService
from org_roster.services.navigation_service import build_navigation
from org_roster.schemas.member_schemas import (
    MemberResponse,
    MemberProfileResponse,
    MemberProfileUpdate,
    MemberListResponse,
    DirectoryEntryResponse,
    RoleAssignmentRequest,
)

router = APIRouter()


def _profile_response(context: MemberContext) -> MemberProfileResponse:
    base = MemberResponse.model_validate(context.member)
    return MemberProfileResponse(
        **base.model_dump(),
        permissions=context.permissions.as_dict(),
        navigation=[
            {"key": item.key, "label": item.label} for item in build_navigation(context)
        ],
    )


@router.get("/me", response_model=MemberProfileResponse)
async def get_my_profile(context: MemberContext = Depends(get_member_context)):
    """
    Get the caller's profile.

    Includes the effective permission set derived from the caller's role
    and the navigation entries the UI should render.
    """
    return _profile_response(context)


@router.patch("/me", response_model=MemberProfileResponse)
async def update_my_profile(
    data: MemberProfileUpdate,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Update the caller's own name, email and LinkedIn"""
    service = MemberService(db)
    service.update_profile(data, context)
    return _profile_response(context)


@router.post("/me/resign", response_model=MemberResponse)
async def resign(
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Resign from the organization.

    The caller becomes an Inactive Member and loses any committee chairs.
    """
    service = MemberService(db)
    return service.resign(context)


@router.get("", response_model=MemberListResponse)
async def list_members(
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    List all members grouped as pending, active, inactive and rejected.

    - **Requires approve_members**
    """
    service = MemberService(db)
    groups = service.list_members(context)
    return MemberListResponse(
        **{name: [MemberResponse.model_validate(m) for m in members] for name, members in groups.items()},
        total=sum(len(members) for members in groups.values()),
    )


@router.get("/directory", response_model=list[DirectoryEntryResponse])
async def member_directory(
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Directory of active members.

    - **Requires view_dashboard**
    """
    service = MemberService(db)
    return service.list_directory(context)


@router.post("/{member_id}/approve", response_model=MemberResponse)
async def approve_member(
    member_id: int,
    assignment: RoleAssignmentRequest,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Approve a pending applicant.

    - **Requires approve_members**
    - Role must rank strictly below the caller's role
    """
    service = MemberService(db)
    return service.approve(member_id, assignment.role, context)


@router.post("/{member_id}/reject", response_model=MemberResponse)
async def reject_member(
    member_id: int,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Reject a pending applicant (clears their role).

    - **Requires approve_members**
    """
    service = MemberService(db)
    return service.reject(member_id, context)


@router.patch("/{member_id}/role", response_model=MemberResponse)
async def change_member_role(
    member_id: int,
    assignment: RoleAssignmentRequest,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Change an active member's role.

    - **Requires approve_members**
    - Caller must outrank the member's current role and the new role
    - Cannot change your own role
    """
    service = MemberService(db)
    return service.change_role(member_id, assignment.role, context)


@router.post("/{member_id}/deactivate", response_model=MemberResponse)
async def deactivate_member(
    member_id: int,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Deactivate a member.

    - **Requires approve_members**
    - Caller must outrank the member
    """
    service = MemberService(db)
    return service.deactivate(member_id, context)


@router.post("/{member_id}/reactivate", response_model=MemberResponse)
async def reactivate_member(
    member_id: int,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Reactivate an inactive or rejected member as Member.

    - **Requires approve_members**
    """
    service = MemberService(db)
    return service.reactivate(member_id, context)
