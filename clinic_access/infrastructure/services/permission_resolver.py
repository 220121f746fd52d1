"""Resolves user roles and permissions from DB (implements IPermissionResolver)."""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)


class PermissionResolver:
    """Resolves user permissions by querying user_role, role_permission and permission."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_role_ids(self, user_id: str) -> list[str]:
        """Return ids of roles assigned to the user."""
        result = await self.db.execute(
            select(UserRole.role_id).where(UserRole.user_id == user_id)
        )
        return list(result.scalars().all())

    async def any_role_grants(
        self, role_ids: list[str], resource: str, action: str
    ) -> bool:
        """Existence query: does any of role_ids grant (resource, action)?"""
        if not role_ids:
            return False
        query = select(
            exists()
            .where(RolePermission.permission_id == Permission.id)
            .where(
                RolePermission.role_id.in_(role_ids),
                Permission.resource == resource,
                Permission.action == action,
            )
        )
        result = await self.db.execute(query)
        return bool(result.scalar())

    async def get_user_permissions(self, user_id: str) -> set[str]:
        """Return set of resource:action codes granted to the user through any role."""
        query = (
            select(Permission.resource, Permission.action)
            .select_from(UserRole)
            .join(RolePermission, RolePermission.role_id == UserRole.role_id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(UserRole.user_id == user_id)
        )
        result = await self.db.execute(query)
        return {f"{resource}:{action}" for resource, action in result.all()}
