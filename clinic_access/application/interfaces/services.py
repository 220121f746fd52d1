"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from typing import Protocol


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for resolving an actor's roles and grants against the role store."""

    async def get_role_ids(self, user_id: str) -> list[str]:
        """Return ids of roles currently assigned to the user."""

    async def any_role_grants(
        self, role_ids: list[str], resource: str, action: str
    ) -> bool:
        """Return True if at least one of the roles holds a (resource, action) permission."""

    async def get_user_permissions(self, user_id: str) -> set[str]:
        """Return the user's permission codes (resource:action)."""


# Permission cache interface
class IPermissionCache(Protocol):
    """Protocol for the per-actor permission code listing cache (e.g. Redis)."""

    def is_available(self) -> bool:
        """Return True if the cache is connected and usable."""

    async def get_codes(self, user_id: str) -> set[str] | None:
        """Return cached codes, or None on miss."""

    async def set_codes(self, user_id: str, codes: set[str]) -> bool:
        """Cache codes for the user; return True on success."""

    async def invalidate_user(self, user_id: str) -> bool:
        """Drop one user's listing; return True on success."""

    async def invalidate_all(self) -> int:
        """Drop every listing; return count removed."""
