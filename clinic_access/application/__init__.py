"""Application layer: interfaces, DTOs and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, permission resolver, cache).
"""

from clinic_access.application.services import (
    AuditQueryService,
    AuditRecorder,
    AuthorizationService,
    RoleAssignmentService,
)

__all__ = [
    "AuditQueryService",
    "AuditRecorder",
    "AuthorizationService",
    "RoleAssignmentService",
]
