"""Persistence repositories. Re-exports for dependency injection."""

from clinic_access.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from clinic_access.infrastructure.persistence.repositories.base import BaseRepository
from clinic_access.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from clinic_access.infrastructure.persistence.repositories.resource_lookup_repo import (
    ResourceLookupRepository,
)
from clinic_access.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from clinic_access.infrastructure.persistence.repositories.role_repo import RoleRepository
from clinic_access.infrastructure.persistence.repositories.user_profile_repo import (
    UserProfileRepository,
)
from clinic_access.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "PermissionRepository",
    "ResourceLookupRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "UserProfileRepository",
    "UserRoleRepository",
]
