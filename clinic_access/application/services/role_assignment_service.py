"""Role assignment: attach/detach roles by name and the role change workflow.

Assign and remove are idempotent and report failure as False, never by
raising. change_role is a two-step saga (remove, then assign) with a
best-effort compensation step; the store gives no atomicity across steps,
so a concurrent permission check may briefly see the actor with no role.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from clinic_access.application.dtos.permission import PermissionResult
from clinic_access.application.dtos.role import RoleChangeResult, RoleResult
from clinic_access.application.interfaces.repositories import (
    IRolePermissionRepository,
    IRoleRepository,
    IUserRoleRepository,
)
from clinic_access.domain.enums import RoleChangeOutcome
from clinic_access.domain.exceptions import DuplicateAssignmentException
from clinic_access.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from clinic_access.application.services.authorization_service import (
        AuthorizationService,
    )

logger = get_logger(__name__)

_MSG_CHANGED = "User role updated successfully"
_MSG_REMOVE_FAILED = "Failed to remove current role"
_MSG_ASSIGN_FAILED = "Failed to assign new role"
_MSG_RESTORE_FAILED = "Failed to assign new role; restoring the previous role also failed"


class RoleAssignmentService:
    """Assign/remove roles to/from users and list roles and their grants."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        user_role_repo: IUserRoleRepository,
        role_permission_repo: IRolePermissionRepository | None = None,
        authorization_service: AuthorizationService | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._user_role_repo = user_role_repo
        self._role_permission_repo = role_permission_repo
        self._authz = authorization_service

    async def assign_role(
        self, user_id: str, role_name: str, *, assigned_by: str | None = None
    ) -> bool:
        """Give the user role_name. Already holding it counts as success.

        Returns False when the role does not exist or the store fails.
        """
        try:
            role = await self._role_repo.get_by_name(role_name)
            if role is None:
                logger.warning("Cannot assign role %r to %s: role not found", role_name, user_id)
                return False
            existing = await self._user_role_repo.get_assignment(user_id, role.id)
            if existing is None:
                try:
                    await self._user_role_repo.assign_role_to_user(
                        user_id, role.id, assigned_by=assigned_by
                    )
                except DuplicateAssignmentException:
                    # Lost a race with a concurrent assign; the row exists either way.
                    logger.debug("Role %r already assigned to %s", role_name, user_id)
        except Exception:
            logger.exception("Error assigning role %r to %s", role_name, user_id)
            return False
        await self._invalidate(user_id)
        return True

    async def remove_role(self, user_id: str, role_name: str) -> bool:
        """Take role_name away from the user. Not holding it counts as success.

        Returns False when the role does not exist or the store fails.
        """
        try:
            role = await self._role_repo.get_by_name(role_name)
            if role is None:
                logger.warning("Cannot remove role %r from %s: role not found", role_name, user_id)
                return False
            removed = await self._user_role_repo.remove_role_from_user(user_id, role.id)
        except Exception:
            logger.exception("Error removing role %r from %s", role_name, user_id)
            return False
        if not removed:
            logger.debug("Role %r was not assigned to %s; nothing to remove", role_name, user_id)
        await self._invalidate(user_id)
        return True

    async def change_role(
        self,
        user_id: str,
        current_role: str,
        new_role: str,
        *,
        assigned_by: str | None = None,
    ) -> RoleChangeResult:
        """Replace current_role with new_role.

        If assigning new_role fails, current_role is re-assigned before
        reporting failure. A failed compensation is reported as
        ASSIGN_FAILED_RESTORE_FAILED; it is never raised.
        """
        if current_role == new_role:
            # Nothing is removed, so a failed assign leaves prior state intact.
            ok = await self.assign_role(user_id, new_role, assigned_by=assigned_by)
            outcome = (
                RoleChangeOutcome.CHANGED if ok else RoleChangeOutcome.ASSIGN_FAILED_RESTORED
            )
            return self._result(user_id, current_role, new_role, outcome)

        if not await self.remove_role(user_id, current_role):
            return self._result(
                user_id, current_role, new_role, RoleChangeOutcome.REMOVE_FAILED
            )

        if await self.assign_role(user_id, new_role, assigned_by=assigned_by):
            logger.info("Changed role of %s from %r to %r", user_id, current_role, new_role)
            return self._result(user_id, current_role, new_role, RoleChangeOutcome.CHANGED)

        restored = await self.assign_role(user_id, current_role, assigned_by=assigned_by)
        if restored:
            logger.warning(
                "Assigning %r to %s failed; restored previous role %r",
                new_role,
                user_id,
                current_role,
            )
            outcome = RoleChangeOutcome.ASSIGN_FAILED_RESTORED
        else:
            logger.error(
                "Assigning %r to %s failed and restoring %r also failed; user may hold no role",
                new_role,
                user_id,
                current_role,
            )
            outcome = RoleChangeOutcome.ASSIGN_FAILED_RESTORE_FAILED
        return self._result(user_id, current_role, new_role, outcome)

    async def get_user_roles(self, user_id: str) -> list[RoleResult]:
        """Return roles held by the user ([] on store fault)."""
        try:
            return await self._user_role_repo.get_user_roles(user_id)
        except Exception:
            logger.exception("Error fetching roles for user %s", user_id)
            return []

    async def get_role_permissions(self, role_id: str) -> list[PermissionResult]:
        """Return permissions granted to the role ([] on store fault)."""
        if self._role_permission_repo is None:
            return []
        try:
            return await self._role_permission_repo.get_permissions_for_role(role_id)
        except Exception:
            logger.exception("Error fetching permissions for role %s", role_id)
            return []

    async def list_roles(self) -> list[RoleResult]:
        """Return all roles ([] on store fault)."""
        try:
            return await self._role_repo.list_roles()
        except Exception:
            logger.exception("Error fetching roles")
            return []

    async def _invalidate(self, user_id: str) -> None:
        if self._authz is not None:
            await self._authz.invalidate_user_cache(user_id)

    @staticmethod
    def _result(
        user_id: str, current_role: str, new_role: str, outcome: RoleChangeOutcome
    ) -> RoleChangeResult:
        message = {
            RoleChangeOutcome.CHANGED: _MSG_CHANGED,
            RoleChangeOutcome.REMOVE_FAILED: _MSG_REMOVE_FAILED,
            RoleChangeOutcome.ASSIGN_FAILED_RESTORED: _MSG_ASSIGN_FAILED,
            RoleChangeOutcome.ASSIGN_FAILED_RESTORE_FAILED: _MSG_RESTORE_FAILED,
        }[outcome]
        return RoleChangeResult(
            user_id=user_id,
            previous_role=current_role,
            new_role=new_role,
            outcome=outcome,
            message=message,
        )
