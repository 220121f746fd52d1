"""Permission repository (implements IPermissionRepository)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.dtos.permission import PermissionResult
from clinic_access.infrastructure.persistence.models.permission import Permission
from clinic_access.infrastructure.persistence.repositories.base import BaseRepository


def _permission_to_result(p: Permission) -> PermissionResult:
    return PermissionResult(
        id=p.id,
        name=p.name,
        resource=p.resource,
        action=p.action,
        description=p.description,
    )


class PermissionRepository(BaseRepository[Permission]):
    """Permission catalogue. Permissions are identified by unique name."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def get_by_name(self, name: str) -> PermissionResult | None:
        result = await self.db.execute(select(Permission).where(Permission.name == name))
        row = result.scalar_one_or_none()
        return _permission_to_result(row) if row else None

    async def create_permission(
        self,
        name: str,
        resource: str,
        action: str,
        description: str | None = None,
    ) -> PermissionResult:
        created = await self.create(
            Permission(name=name, resource=resource, action=action, description=description)
        )
        return _permission_to_result(created)
