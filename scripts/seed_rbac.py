"""Seed default clinic roles and permissions (idempotent).

Usage:
    python -m scripts.seed_rbac [admin_user_id]
With admin_user_id, also assigns the Admin role to that user. Requires
Postgres with migrations applied (alembic upgrade head).
"""

import asyncio
import sys

from clinic_access.application.services.authorization_service import AuthorizationService
from clinic_access.application.services.permission_service import PermissionService
from clinic_access.application.services.rbac_seed_service import RbacSeedService
from clinic_access.application.services.role_assignment_service import (
    RoleAssignmentService,
)
from clinic_access.application.services.role_service import RoleService
from clinic_access.core.config import get_settings
from clinic_access.infrastructure.cache.redis_cache import RedisPermissionCache
from clinic_access.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from clinic_access.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
)
from clinic_access.infrastructure.services.permission_resolver import PermissionResolver
from clinic_access.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Seed RBAC; optionally make the given user an Admin.

    Running API processes may hold cached permission listings; when Redis is
    enabled they are invalidated so the new grants show up.
    """
    admin_user_id = sys.argv[1] if len(sys.argv) > 1 else None

    get_settings()
    setup_logging()
    session_factory = get_session_factory()
    cache = RedisPermissionCache()
    await cache.connect()

    async with session_factory() as session:
        async with session.begin():
            role_repo = RoleRepository(session)
            permission_repo = PermissionRepository(session)
            role_permission_repo = RolePermissionRepository(session)
            authz = AuthorizationService(PermissionResolver(session), cache=cache)
            seed_svc = RbacSeedService(
                role_repo,
                PermissionService(permission_repo),
                RoleService(role_repo, permission_repo, role_permission_repo),
                authorization_service=authz,
            )
            summary = await seed_svc.seed()
            print(
                f"Seeded RBAC: {summary.permissions_created} permission(s), "
                f"{summary.roles_created} role(s) created"
            )
            if admin_user_id:
                assignment = RoleAssignmentService(
                    role_repo, UserRoleRepository(session), authorization_service=authz
                )
                if not await assignment.assign_role(admin_user_id, "Admin"):
                    print(f"Failed to assign Admin to {admin_user_id}", file=sys.stderr)
                    sys.exit(1)
                print(f"Assigned Admin to {admin_user_id}")
    await cache.disconnect()
    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
