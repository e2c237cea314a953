from fastapi import APIRouter, Depends

from org_roster.dependencies import get_member_context
from org_roster.models.member_context import MemberContext
from org_roster.models.role import definition_of, roles_by_priority
from org_roster.schemas.role_schemas import (
    AssignableRolesResponse,
    PermissionSetResponse,
    RoleDefinitionResponse,
)

router = APIRouter()


@router.get("", response_model=list[RoleDefinitionResponse])
async def list_roles():
    """Role table, lowest priority first. Does not require authentication."""
    result = []
    for name in roles_by_priority():
        definition = definition_of(name)
        result.append(
            RoleDefinitionResponse(
                name=definition.name,
                priority=definition.priority,
                permissions=PermissionSetResponse(**definition.permissions.as_dict()),
            )
        )
    return result


@router.get("/assignable", response_model=AssignableRolesResponse)
async def list_assignable_roles(context: MemberContext = Depends(get_member_context)):
    """
    Roles the caller may assign to other members, highest priority first.

    Used to populate role-change dropdowns.
    """
    return AssignableRolesResponse(acting_role=context.role, roles=context.assignable_roles())
