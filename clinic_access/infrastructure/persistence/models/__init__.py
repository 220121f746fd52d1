"""Persistence models: ORM entities and mixins."""

from clinic_access.infrastructure.persistence.models.audit_log import AuditLog
from clinic_access.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)
from clinic_access.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from clinic_access.infrastructure.persistence.models.reference import (
    Appointment,
    Clinic,
    Doctor,
    Patient,
)
from clinic_access.infrastructure.persistence.models.role import Role
from clinic_access.infrastructure.persistence.models.user_profile import UserProfile

__all__ = [
    "AuditLog",
    "Role",
    "Permission",
    "RolePermission",
    "UserRole",
    "UserProfile",
    "Patient",
    "Doctor",
    "Clinic",
    "Appointment",
    "CuidMixin",
    "CreatedAtMixin",
    "TimestampMixin",
]
