from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from org_roster.core.security import extract_auth_user_id
from org_roster.core.exceptions import UnauthorizedException
from org_roster.database import get_db
from org_roster.models.member import Member
from org_roster.models.member_context import MemberContext
from org_roster.services.member_service import MemberService

security = HTTPBearer(auto_error=False)


async def get_current_member(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> Member:
    """
    FastAPI dependency to validate JWT and get/register the member.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using shared SECRET_KEY
    3. Extract auth_user_id from 'sub' claim
    4. Get or auto-register Member record (PENDING_USER on first contact)
    5. Return Member object for use in endpoints

    Raises:
        HTTPException 401: If token missing, invalid or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        auth_user_id = extract_auth_user_id(credentials.credentials)
    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return MemberService(db).get_or_register(auth_user_id)


async def get_member_context(member: Member = Depends(get_current_member)) -> MemberContext:
    """
    FastAPI dependency resolving the member's role assignment.

    A stored role outside the registry raises UnknownRoleException, which
    the app turns into a 403 so the request is denied rather than run with
    a guessed role.
    """
    return MemberContext(member=member, assignment=member.assignment)
