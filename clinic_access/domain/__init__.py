"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from clinic_access.domain.enums import PermissionDecision, RoleChangeOutcome
from clinic_access.domain.exceptions import (
    AuditLogImmutableException,
    AuthenticationException,
    AuthorizationException,
    ClinicAccessException,
    DuplicateAssignmentException,
    ResourceNotFoundException,
    RoleNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "PermissionDecision",
    "RoleChangeOutcome",
    # Exceptions
    "AuditLogImmutableException",
    "AuthenticationException",
    "AuthorizationException",
    "ClinicAccessException",
    "DuplicateAssignmentException",
    "ResourceNotFoundException",
    "RoleNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
]
