"""Default clinic roles and permissions, seeded idempotently."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypedDict

from clinic_access.application.interfaces.repositories import IRoleRepository
from clinic_access.application.services.permission_service import (
    PermissionService,
    permission_name,
)
from clinic_access.application.services.role_service import RoleService
from clinic_access.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from clinic_access.application.services.authorization_service import (
        AuthorizationService,
    )

logger = get_logger(__name__)


class RoleData(TypedDict):
    """Role configuration for default roles."""

    name: str
    description: str
    permissions: list[str]


_CRUD = ("view", "create", "update", "delete")

SYSTEM_PERMISSIONS: list[tuple[str, str, str]] = [
    *[("patient", a, f"{a.capitalize()} patients") for a in _CRUD],
    *[("appointment", a, f"{a.capitalize()} appointments") for a in _CRUD],
    *[("medical_record", a, f"{a.capitalize()} medical records") for a in _CRUD],
    *[("vitals", a, f"{a.capitalize()} vitals") for a in _CRUD],
    *[("prescription", a, f"{a.capitalize()} prescriptions") for a in _CRUD],
    *[("lab_result", a, f"{a.capitalize()} lab results") for a in _CRUD],
    *[("billing", a, f"{a.capitalize()} invoices and billing items") for a in _CRUD],
    *[("inventory", a, f"{a.capitalize()} inventory") for a in _CRUD],
    *[("doctor", a, f"{a.capitalize()} doctors") for a in _CRUD],
    *[("clinic", a, f"{a.capitalize()} clinics") for a in _CRUD],
    *[("staff", a, f"{a.capitalize()} staff") for a in _CRUD],
    ("role", "view", "View roles and their permissions"),
    ("role", "create", "Create roles"),
    ("role", "update", "Grant permissions to roles"),
    ("user_role", "view", "View user role assignments"),
    ("user_role", "update", "Assign, remove and change user roles"),
    ("audit_log", "view", "View the audit trail"),
]

DEFAULT_ROLES: list[RoleData] = [
    {
        "name": "Admin",
        "description": "Full access to clinical, administrative and security features",
        "permissions": ["*"],
    },
    {
        "name": "Doctor",
        "description": "Clinical care: patients, records, prescriptions and lab results",
        "permissions": [
            "patient:*",
            "appointment:*",
            "medical_record:*",
            "vitals:*",
            "prescription:*",
            "lab_result:*",
        ],
    },
    {
        "name": "Nurse",
        "description": "Patient care: records and vitals",
        "permissions": [
            "patient:view",
            "patient:update",
            "appointment:view",
            "medical_record:view",
            "medical_record:update",
            "vitals:*",
        ],
    },
    {
        "name": "Receptionist",
        "description": "Front desk: patient registration and scheduling",
        "permissions": ["patient:view", "patient:create", "patient:update", "appointment:*"],
    },
    {
        "name": "Lab Technician",
        "description": "Laboratory: lab results",
        "permissions": ["patient:view", "lab_result:*"],
    },
    {
        "name": "Pharmacist",
        "description": "Pharmacy: prescriptions and inventory",
        "permissions": ["patient:view", "prescription:view", "prescription:update", "inventory:*"],
    },
    {
        "name": "Billing Specialist",
        "description": "Billing: invoices and billing items",
        "permissions": ["patient:view", "billing:*"],
    },
    {
        "name": "Patient",
        "description": "Patient portal: own health data",
        "permissions": ["appointment:view", "medical_record:view", "prescription:view"],
    },
    {
        "name": "Radiologist",
        "description": "Imaging: patient records and lab results",
        "permissions": ["patient:view", "medical_record:view", "lab_result:view", "lab_result:create"],
    },
    {
        "name": "IT Support",
        "description": "Operations: audit trail and user role administration",
        "permissions": ["audit_log:view", "user_role:view", "role:view"],
    },
]


@dataclass(frozen=True)
class SeedSummary:
    permissions_created: int
    roles_created: int


def resolve_permission_pattern(pattern: str, names: list[str]) -> list[str]:
    """Expand "*" (everything) and "resource:*"; plain names pass through if known."""
    if pattern == "*":
        return list(names)
    if pattern.endswith(":*"):
        prefix = pattern[:-1]
        return [n for n in names if n.startswith(prefix)]
    return [pattern] if pattern in names else []


class RbacSeedService:
    """Create missing default permissions and roles; grant role permissions.

    Safe to re-run: existing rows are left in place and grants are idempotent.
    Cached permission listings are dropped afterwards, since grants may change.
    """

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_service: PermissionService,
        role_service: RoleService,
        authorization_service: AuthorizationService | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._permission_service = permission_service
        self._role_service = role_service
        self._authz = authorization_service

    async def seed(self) -> SeedSummary:
        names: list[str] = []
        permissions_created = 0
        for resource, action, description in SYSTEM_PERMISSIONS:
            _, created = await self._permission_service.ensure_permission(
                resource, action, description
            )
            permissions_created += int(created)
            names.append(permission_name(resource, action))

        roles_created = 0
        for role_data in DEFAULT_ROLES:
            grants = [
                name
                for pattern in role_data["permissions"]
                for name in resolve_permission_pattern(pattern, names)
            ]
            if await self._role_repo.get_by_name(role_data["name"]) is None:
                await self._role_service.create_role_with_permissions(
                    role_data["name"], role_data["description"], grants
                )
                roles_created += 1
                continue
            for name in grants:
                await self._role_service.grant_permission(role_data["name"], name)

        if self._authz is not None:
            await self._authz.invalidate_all()

        logger.info(
            "RBAC seed complete: %d permission(s), %d role(s) created",
            permissions_created,
            roles_created,
        )
        return SeedSummary(permissions_created=permissions_created, roles_created=roles_created)
