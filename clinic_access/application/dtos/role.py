"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass

from clinic_access.domain.enums import RoleChangeOutcome


@dataclass(frozen=True)
class RoleResult:
    """Role read-model (result of get_by_name, list_roles, get_user_roles, etc.)."""

    id: str
    name: str
    description: str | None


@dataclass(frozen=True)
class UserRoleResult:
    """One user-role assignment row."""

    id: str
    user_id: str
    role_id: str
    assigned_by: str | None


@dataclass(frozen=True)
class RoleChangeResult:
    """Net outcome of change_role. Only CHANGED means the new role is held."""

    user_id: str
    previous_role: str
    new_role: str
    outcome: RoleChangeOutcome
    message: str

    @property
    def success(self) -> bool:
        return self.outcome.succeeded
