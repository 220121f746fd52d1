"""User-roles API: list a user's roles and permissions, and change one role for another."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from clinic_access.api.v1.dependencies import (
    get_audit_recorder,
    get_authorization_service,
    get_request_context,
    get_role_assignment_service,
    require_permission,
)
from clinic_access.application.services.audit_recorder import AuditRecorder
from clinic_access.application.services.authorization_service import AuthorizationService
from clinic_access.application.services.role_assignment_service import (
    RoleAssignmentService,
)
from clinic_access.schemas.role import (
    RoleChangeRequest,
    RoleChangeResponse,
    RoleResponse,
    UserPermissionsResponse,
)
from clinic_access.shared.context import RequestContext

router = APIRouter()


@router.get("/{user_id}/roles", response_model=list[RoleResponse])
async def list_user_roles(
    user_id: str,
    role_svc: Annotated[RoleAssignmentService, Depends(get_role_assignment_service)],
    _: Annotated[str, Depends(require_permission("user_role", "view"))],
):
    """List roles assigned to a user."""
    roles = await role_svc.get_user_roles(user_id)
    return [RoleResponse.model_validate(r) for r in roles]


@router.get("/{user_id}/permissions", response_model=UserPermissionsResponse)
async def list_user_permissions(
    user_id: str,
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    _: Annotated[str, Depends(require_permission("user_role", "view"))],
):
    """List permission codes granted to a user through their roles (cached)."""
    permissions = await auth_svc.get_user_permissions(user_id)
    return UserPermissionsResponse(user_id=user_id, permissions=sorted(permissions))


@router.put("/{user_id}/roles", response_model=RoleChangeResponse)
async def change_user_role(
    user_id: str,
    body: RoleChangeRequest,
    response: Response,
    role_svc: Annotated[RoleAssignmentService, Depends(get_role_assignment_service)],
    recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    _: Annotated[str, Depends(require_permission("user_role", "update"))],
):
    """Replace current_role with new_role. 409 when the change did not take effect."""
    result = await role_svc.change_role(
        user_id, body.current_role, body.new_role, assigned_by=ctx.actor_id
    )
    await recorder.update(
        ctx,
        "user_role",
        user_id,
        {
            "previous_role": result.previous_role,
            "new_role": result.new_role,
            "outcome": result.outcome,
        },
    )
    if not result.success:
        response.status_code = 409
    return RoleChangeResponse.model_validate(result)
