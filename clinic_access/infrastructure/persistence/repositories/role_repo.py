"""Role repository. Read methods return RoleResult (DTO)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.dtos.role import RoleResult
from clinic_access.infrastructure.persistence.models.role import Role
from clinic_access.infrastructure.persistence.repositories.base import BaseRepository


def _role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(id=r.id, name=r.name, description=r.description)


class RoleRepository(BaseRepository[Role]):
    """Role repository (implements IRoleRepository)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def create_role(self, name: str, description: str | None = None) -> RoleResult:
        """Create a role; return read-model DTO."""
        created = await self.create(Role(name=name, description=description))
        return _role_to_result(created)

    async def get_by_name(self, name: str) -> RoleResult | None:
        result = await self.db.execute(select(Role).where(Role.name == name))
        row = result.scalar_one_or_none()
        return _role_to_result(row) if row else None

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        orm = await self.get_entity_by_id(role_id)
        return _role_to_result(orm) if orm else None

    async def list_roles(self) -> list[RoleResult]:
        result = await self.db.execute(select(Role).order_by(Role.name))
        return [_role_to_result(r) for r in result.scalars().all()]
