"""Application DTOs (no ORM dependency)."""

from clinic_access.application.dtos.audit_log import (
    ActorProfile,
    AuditEventCreate,
    AuditEventResult,
    AuditEventWithActor,
    AuditLogFilters,
    AuditLogPage,
    AuditWriteResult,
)
from clinic_access.application.dtos.permission import PermissionResult
from clinic_access.application.dtos.role import (
    RoleChangeResult,
    RoleResult,
    UserRoleResult,
)

__all__ = [
    "ActorProfile",
    "AuditEventCreate",
    "AuditEventResult",
    "AuditEventWithActor",
    "AuditLogFilters",
    "AuditLogPage",
    "AuditWriteResult",
    "PermissionResult",
    "RoleChangeResult",
    "RoleResult",
    "UserRoleResult",
]
