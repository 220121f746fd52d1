"""Infrastructure implementations of application service interfaces."""

from clinic_access.infrastructure.services.permission_resolver import PermissionResolver

__all__ = ["PermissionResolver"]
