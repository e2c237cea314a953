from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from org_roster.database import get_db
from org_roster.dependencies import get_member_context
from org_roster.models.member_context import MemberContext
from org_roster.services.committee_service import CommitteeService
from org_roster.schemas.committee_schemas import (
    CommitteeCreate,
    CommitteeUpdate,
    CommitteeResponse,
    CommitteeListResponse,
    ChairAssignment,
    CommitteeSeatCreate,
    CommitteeSeatResponse,
)

router = APIRouter()


@router.get("", response_model=CommitteeListResponse)
async def list_committees(
    include_inactive: bool = True,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """List committees (requires view_dashboard)"""
    service = CommitteeService(db)
    committees = service.list_committees(context, include_inactive=include_inactive)
    return CommitteeListResponse(committees=committees, total=len(committees))


@router.post("", response_model=CommitteeResponse, status_code=status.HTTP_201_CREATED)
async def create_committee(
    data: CommitteeCreate,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Create a committee (requires create_committees)"""
    service = CommitteeService(db)
    return service.create_committee(data, context)


@router.get("/mine", response_model=list[CommitteeSeatResponse])
async def list_my_committees(
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Committees the caller serves on"""
    service = CommitteeService(db)
    return service.list_own_seats(context)


@router.get("/{committee_id}", response_model=CommitteeResponse)
async def get_committee(
    committee_id: int,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Get committee details"""
    service = CommitteeService(db)
    return service.get_committee(committee_id, context)


@router.patch("/{committee_id}", response_model=CommitteeResponse)
async def update_committee(
    committee_id: int,
    data: CommitteeUpdate,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Update committee details.

    - **Requires manage_committees**
    - Deactivating a committee clears its chair
    """
    service = CommitteeService(db)
    return service.update_committee(committee_id, data, context)


@router.put("/{committee_id}/chair", response_model=CommitteeResponse)
async def assign_chair(
    committee_id: int,
    data: ChairAssignment,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """
    Assign the committee chair.

    - **Requires manage_committees**
    - Chair must be an active member
    """
    service = CommitteeService(db)
    return service.assign_chair(committee_id, data.member_id, context)


@router.get("/{committee_id}/members", response_model=list[CommitteeSeatResponse])
async def list_committee_members(
    committee_id: int,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Members serving on a committee"""
    service = CommitteeService(db)
    return service.list_seats(committee_id, context)


@router.post(
    "/{committee_id}/members",
    response_model=CommitteeSeatResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_committee_member(
    committee_id: int,
    data: CommitteeSeatCreate,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Add a member to a committee (requires manage_committees)"""
    service = CommitteeService(db)
    return service.add_seat(committee_id, data, context)


@router.delete("/{committee_id}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_committee_member(
    committee_id: int,
    member_id: int,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Remove a member from a committee (requires manage_committees)"""
    service = CommitteeService(db)
    service.remove_seat(committee_id, member_id, context)
    return None


@router.delete("/{committee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_committee(
    committee_id: int,
    context: MemberContext = Depends(get_member_context),
    db: Session = Depends(get_db),
):
    """Delete committee and all its seats (requires manage_committees)"""
    service = CommitteeService(db)
    service.delete_committee(committee_id, context)
    return None
