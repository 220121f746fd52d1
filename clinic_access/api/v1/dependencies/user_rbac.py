"""Role assignment dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from clinic_access.application.services.authorization_service import AuthorizationService
from clinic_access.application.services.role_assignment_service import (
    RoleAssignmentService,
)
from clinic_access.infrastructure.persistence.repositories import (
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
)

from . import auth
from . import db as db_deps


def get_role_assignment_service(
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo_for_write)],
    user_role_repo: Annotated[UserRoleRepository, Depends(db_deps.get_user_role_repo_for_write)],
    role_permission_repo: Annotated[
        RolePermissionRepository, Depends(db_deps.get_role_permission_repo_for_write)
    ],
    auth_svc: Annotated[AuthorizationService, Depends(auth.get_authorization_service)],
) -> RoleAssignmentService:
    """Role assignment service; invalidates cached permission listings on change."""
    return RoleAssignmentService(
        role_repo=role_repo,
        user_role_repo=user_role_repo,
        role_permission_repo=role_permission_repo,
        authorization_service=auth_svc,
    )
