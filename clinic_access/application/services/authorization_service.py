"""Authorization service: fail-closed permission checks over the role store."""

from __future__ import annotations

from clinic_access.application.interfaces.services import (
    IPermissionCache,
    IPermissionResolver,
)
from clinic_access.domain.enums import PermissionDecision
from clinic_access.domain.exceptions import AuthorizationException
from clinic_access.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class AuthorizationService:
    """Centralized permission checking.

    Decisions always come from the store (existence query), so a role change
    is visible to the very next check. The cache only backs the permission
    code listing used by UIs.
    """

    def __init__(
        self,
        permission_resolver: IPermissionResolver,
        cache: IPermissionCache | None = None,
    ) -> None:
        self.permission_resolver = permission_resolver
        self.cache = cache

    async def evaluate(
        self, user_id: str | None, resource: str, action: str
    ) -> PermissionDecision:
        """Decide whether user_id may perform action on resource.

        Returns NO_ROLES when the actor holds no role (there is no implicit
        allow), DENIED when none of its roles grant (resource, action), and
        ERROR when the store failed. Never raises.
        """
        if not user_id:
            return PermissionDecision.NO_ROLES
        try:
            role_ids = await self.permission_resolver.get_role_ids(user_id)
            if not role_ids:
                logger.debug("Permission check for %s: no roles assigned", user_id)
                return PermissionDecision.NO_ROLES
            granted = await self.permission_resolver.any_role_grants(
                role_ids, resource, action
            )
        except Exception:
            logger.exception(
                "Permission check failed for user %s (%s:%s); denying",
                user_id,
                resource,
                action,
            )
            return PermissionDecision.ERROR
        if granted:
            return PermissionDecision.ALLOWED
        logger.debug("Permission denied: %s on %s for %s", action, resource, user_id)
        return PermissionDecision.DENIED

    async def has_permission(
        self, user_id: str | None, resource: str, action: str
    ) -> bool:
        """Return True only on a definitive allow; faults and unknowns are False."""
        decision = await self.evaluate(user_id, resource, action)
        return decision is PermissionDecision.ALLOWED

    async def require_permission(
        self, user_id: str | None, resource: str, action: str
    ) -> None:
        """Raise AuthorizationException unless the actor is allowed."""
        if not await self.has_permission(user_id, resource, action):
            raise AuthorizationException(resource=resource, action=action)

    async def get_user_permissions(self, user_id: str) -> set[str]:
        """Return set of permission codes (e.g. patient:view). Uses cache if available.

        Store faults return an empty set and are never cached.
        """
        if self.cache is not None and self.cache.is_available():
            cached = await self.cache.get_codes(user_id)
            if cached is not None:
                return cached
        try:
            permissions = await self.permission_resolver.get_user_permissions(user_id)
        except Exception:
            logger.exception("Failed to load permissions for user %s", user_id)
            return set()
        if self.cache is not None and self.cache.is_available():
            await self.cache.set_codes(user_id, permissions)
        return permissions

    async def invalidate_user_cache(self, user_id: str) -> None:
        """Invalidate cached permissions for one user (after role changes)."""
        if self.cache is not None and self.cache.is_available():
            await self.cache.invalidate_user(user_id)

    async def invalidate_all(self) -> None:
        """Invalidate every cached permission set (after role grants change)."""
        if self.cache is not None and self.cache.is_available():
            await self.cache.invalidate_all()
