"""Repository dependencies (composition root).

Reads use get_db; writes use get_db_transactional (commit on success,
rollback on exception). FastAPI caches each per request, so all write
dependencies of one request share a session and transaction.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.infrastructure.persistence.database import get_db, get_db_transactional
from clinic_access.infrastructure.persistence.repositories import (
    AuditLogRepository,
    ResourceLookupRepository,
    RolePermissionRepository,
    RoleRepository,
    UserProfileRepository,
    UserRoleRepository,
)


async def get_audit_log_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuditLogRepository:
    """Audit log repository for reads (query, get by id)."""
    return AuditLogRepository(db)


async def get_audit_log_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AuditLogRepository:
    """Audit log repository for appends (same transaction as the mutation)."""
    return AuditLogRepository(db)


async def get_user_profile_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserProfileRepository:
    return UserProfileRepository(db)


async def get_resource_lookup_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ResourceLookupRepository:
    return ResourceLookupRepository(db)


async def get_role_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RoleRepository:
    return RoleRepository(db)


async def get_user_role_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRoleRepository:
    return UserRoleRepository(db)


async def get_role_permission_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RolePermissionRepository:
    return RolePermissionRepository(db)
