"""Role application service: create role with optional permission grants."""

from __future__ import annotations

from clinic_access.application.dtos.role import RoleResult
from clinic_access.application.interfaces.repositories import (
    IPermissionRepository,
    IRolePermissionRepository,
    IRoleRepository,
)
from clinic_access.domain.exceptions import (
    DuplicateAssignmentException,
    RoleNotFoundException,
    ValidationException,
)


class RoleService:
    """Administrative role store writes. Roles evolve slowly; no delete path."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
        role_permission_repo: IRolePermissionRepository,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._role_permission_repo = role_permission_repo

    async def create_role_with_permissions(
        self,
        name: str,
        description: str | None = None,
        permission_names: list[str] | None = None,
    ) -> RoleResult:
        """Create role and optionally grant permissions by name.

        Raises:
            ValidationException: If the role exists or a permission name is invalid.
        """
        existing = await self._role_repo.get_by_name(name)
        if existing:
            raise ValidationException(f"Role '{name}' already exists", field="name")
        created = await self._role_repo.create_role(name=name, description=description)
        for permission_name in permission_names or []:
            await self._grant(created, permission_name)
        return created

    async def grant_permission(self, role_name: str, permission_name: str) -> None:
        """Grant one permission to an existing role. Granting twice is a no-op.

        Raises:
            RoleNotFoundException: If the role does not exist.
            ValidationException: If the permission does not exist.
        """
        role = await self._role_repo.get_by_name(role_name)
        if role is None:
            raise RoleNotFoundException(role_name)
        await self._grant(role, permission_name)

    async def _grant(self, role: RoleResult, permission_name: str) -> None:
        perm = await self._permission_repo.get_by_name(permission_name)
        if perm is None:
            raise ValidationException(
                f"Invalid permission: {permission_name}", field="permission_names"
            )
        try:
            await self._role_permission_repo.assign_permission_to_role(
                role_id=role.id, permission_id=perm.id
            )
        except DuplicateAssignmentException:
            pass
