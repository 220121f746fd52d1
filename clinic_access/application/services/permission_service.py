"""Permission application service: create with duplicate check, get-or-create."""

from __future__ import annotations

from clinic_access.application.dtos.permission import PermissionResult
from clinic_access.application.interfaces.repositories import IPermissionRepository
from clinic_access.domain.exceptions import ValidationException

_MSG_DUPLICATE_PERMISSION = "Permission with name '%s' already exists"


def permission_name(resource: str, action: str) -> str:
    """Canonical permission name: resource:action."""
    return f"{resource}:{action}"


class PermissionService:
    """Create permissions with validation."""

    def __init__(self, permission_repo: IPermissionRepository) -> None:
        self._repo = permission_repo

    async def create_permission(
        self,
        resource: str,
        action: str,
        description: str | None = None,
    ) -> PermissionResult:
        """Create permission named resource:action. Raises ValidationException if it exists."""
        name = permission_name(resource, action)
        # Duplicate check is best-effort; the unique constraint on name backs it up.
        existing = await self._repo.get_by_name(name)
        if existing:
            raise ValidationException(_MSG_DUPLICATE_PERMISSION % name, field="name")
        return await self._repo.create_permission(
            name=name,
            resource=resource,
            action=action,
            description=description,
        )

    async def ensure_permission(
        self,
        resource: str,
        action: str,
        description: str | None = None,
    ) -> tuple[PermissionResult, bool]:
        """Return (permission, created). Existing permissions are left unchanged."""
        existing = await self._repo.get_by_name(permission_name(resource, action))
        if existing:
            return existing, False
        return await self.create_permission(resource, action, description), True
