"""UserRole repository: user-role assignments (single entity responsibility)."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.dtos.role import RoleResult, UserRoleResult
from clinic_access.domain.exceptions import DuplicateAssignmentException
from clinic_access.infrastructure.persistence.models.permission import UserRole
from clinic_access.infrastructure.persistence.models.role import Role
from clinic_access.infrastructure.persistence.repositories.role_repo import _role_to_result


def _user_role_to_result(ur: UserRole) -> UserRoleResult:
    return UserRoleResult(
        id=ur.id,
        user_id=ur.user_id,
        role_id=ur.role_id,
        assigned_by=ur.assigned_by,
    )


class UserRoleRepository:
    """User-role link table only. Assign/remove and list roles for a user.

    Writes run in a SAVEPOINT so a failed insert/delete leaves the outer
    transaction usable (the role change workflow compensates in the same session).
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_roles(self, user_id: str) -> list[RoleResult]:
        result = await self.db.execute(
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.name)
        )
        return [_role_to_result(r) for r in result.scalars().all()]

    async def get_assignment(self, user_id: str, role_id: str) -> UserRoleResult | None:
        result = await self.db.execute(
            select(UserRole).where(
                UserRole.user_id == user_id,
                UserRole.role_id == role_id,
            )
        )
        row = result.scalar_one_or_none()
        return _user_role_to_result(row) if row else None

    async def assign_role_to_user(
        self,
        user_id: str,
        role_id: str,
        assigned_by: str | None = None,
    ) -> UserRoleResult:
        ur = UserRole(user_id=user_id, role_id=role_id, assigned_by=assigned_by)
        try:
            async with self.db.begin_nested():
                self.db.add(ur)
                await self.db.flush()
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Role already assigned to user",
                assignment_type="user_role",
                details_extra={"user_id": user_id, "role_id": role_id},
            ) from None
        return _user_role_to_result(ur)

    async def remove_role_from_user(self, user_id: str, role_id: str) -> bool:
        async with self.db.begin_nested():
            result = await self.db.execute(
                delete(UserRole).where(
                    UserRole.user_id == user_id,
                    UserRole.role_id == role_id,
                )
            )
        return bool(result.rowcount)
