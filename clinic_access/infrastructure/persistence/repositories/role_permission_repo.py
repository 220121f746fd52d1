"""RolePermission repository: role-permission grants (single entity responsibility)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.dtos.permission import PermissionResult
from clinic_access.domain.exceptions import DuplicateAssignmentException
from clinic_access.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from clinic_access.infrastructure.persistence.repositories.permission_repo import (
    _permission_to_result,
)


class RolePermissionRepository:
    """Role-permission link table only. Grant and query permissions for a role."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_permissions_for_role(self, role_id: str) -> list[PermissionResult]:
        result = await self.db.execute(
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.name)
        )
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def assign_permission_to_role(self, role_id: str, permission_id: str) -> None:
        rp = RolePermission(role_id=role_id, permission_id=permission_id)
        try:
            async with self.db.begin_nested():
                self.db.add(rp)
                await self.db.flush()
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Permission already assigned to role",
                assignment_type="role_permission",
                details_extra={"role_id": role_id, "permission_id": permission_id},
            ) from None
