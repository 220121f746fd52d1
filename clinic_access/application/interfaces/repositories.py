"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Implementations may raise on store faults; services decide the safe default.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from clinic_access.application.dtos.audit_log import (
        ActorProfile,
        AuditEventCreate,
        AuditEventResult,
    )
    from clinic_access.application.dtos.permission import PermissionResult
    from clinic_access.application.dtos.role import RoleResult, UserRoleResult


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for role repository (DIP)."""

    async def get_by_name(self, name: str) -> RoleResult | None:
        """Return role by unique name if it exists; otherwise None."""

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        """Return role by id if it exists; otherwise None."""

    async def list_roles(self) -> list[RoleResult]:
        """Return all roles ordered by name."""

    async def create_role(
        self, name: str, description: str | None = None
    ) -> RoleResult:
        """Create a role; return created read-model DTO."""


# Permission repository interface
class IPermissionRepository(Protocol):
    """Protocol for permission repository (DIP)."""

    async def get_by_name(self, name: str) -> PermissionResult | None:
        """Return permission by unique name if it exists; otherwise None."""

    async def create_permission(
        self,
        name: str,
        resource: str,
        action: str,
        description: str | None = None,
    ) -> PermissionResult:
        """Create a permission; return created DTO."""


# Role permission repository interface
class IRolePermissionRepository(Protocol):
    """Protocol for role-permission assignment repository (DIP)."""

    async def get_permissions_for_role(self, role_id: str) -> list[PermissionResult]:
        """Return permissions granted to the role."""

    async def assign_permission_to_role(self, role_id: str, permission_id: str) -> None:
        """Grant a permission to a role. Raises DuplicateAssignmentException if already granted."""


# User role repository interface
class IUserRoleRepository(Protocol):
    """Protocol for user-role assignment repository (DIP)."""

    async def get_user_roles(self, user_id: str) -> list[RoleResult]:
        """Return roles assigned to the user."""

    async def get_assignment(self, user_id: str, role_id: str) -> UserRoleResult | None:
        """Return the assignment row for (user, role) if present."""

    async def assign_role_to_user(
        self, user_id: str, role_id: str, assigned_by: str | None = None
    ) -> UserRoleResult:
        """Insert an assignment. Raises DuplicateAssignmentException on unique violation."""

    async def remove_role_from_user(self, user_id: str, role_id: str) -> bool:
        """Delete the assignment; return True if a row was deleted."""


# Audit log repository interface (append-only)
class IAuditLogRepository(Protocol):
    """Protocol for audit log repository (DIP). Append-only: no update, no delete."""

    async def create(self, entry: AuditEventCreate) -> AuditEventResult:
        """Append one audit event; return created record."""

    async def get_by_id(self, event_id: str) -> AuditEventResult | None:
        """Return one audit event by id."""

    async def list(
        self,
        *,
        user_id: str | None = None,
        action: str | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[AuditEventResult]:
        """List events matching all given filters, newest first."""

    async def count(
        self,
        *,
        user_id: str | None = None,
        action: str | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> int:
        """Count events matching all given filters (no pagination)."""


# Identity/profile interface
class IUserProfileRepository(Protocol):
    """Protocol for actor profile lookup (separate logical table from the audit log)."""

    async def get_by_ids(self, user_ids: set[str]) -> dict[str, ActorProfile]:
        """Return profiles keyed by id. Missing ids are simply absent."""

    async def get_by_id(self, user_id: str) -> ActorProfile | None:
        """Return one profile or None."""


# Resource label lookups
class IResourceLookupRepository(Protocol):
    """Protocol for type-specific lookups used to label audited resources."""

    async def get_patient_name(self, patient_id: str) -> tuple[str, str] | None:
        """Return (first_name, last_name) of the patient, or None."""

    async def get_doctor_user_id(self, doctor_id: str) -> str | None:
        """Return the user id behind a doctor record, or None."""

    async def get_clinic_name(self, clinic_id: str) -> str | None:
        """Return the clinic name, or None."""

    async def get_appointment_id(self, appointment_id: str) -> str | None:
        """Return the appointment id if the appointment exists, else None."""
