"""Audit trail dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from clinic_access.application.services.audit_query_service import AuditQueryService
from clinic_access.application.services.audit_recorder import AuditRecorder
from clinic_access.application.services.resource_name_resolver import (
    ResourceNameResolver,
)
from clinic_access.core.config import get_settings
from clinic_access.infrastructure.persistence.repositories import (
    AuditLogRepository,
    ResourceLookupRepository,
    UserProfileRepository,
)

from . import db as db_deps


def get_audit_recorder(
    audit_repo: Annotated[AuditLogRepository, Depends(db_deps.get_audit_log_repo_for_write)],
) -> AuditRecorder:
    """Recorder writing in the request's transaction (inside a SAVEPOINT)."""
    return AuditRecorder(audit_repo, unknown_value=get_settings().audit_unknown_value)


def get_audit_query_service(
    audit_repo: Annotated[AuditLogRepository, Depends(db_deps.get_audit_log_repo)],
    profile_repo: Annotated[UserProfileRepository, Depends(db_deps.get_user_profile_repo)],
) -> AuditQueryService:
    settings = get_settings()
    return AuditQueryService(
        audit_repo,
        profile_repo,
        default_limit=settings.audit_query_default_limit,
        max_limit=settings.audit_query_max_limit,
    )


def get_resource_name_resolver(
    lookup_repo: Annotated[ResourceLookupRepository, Depends(db_deps.get_resource_lookup_repo)],
    profile_repo: Annotated[UserProfileRepository, Depends(db_deps.get_user_profile_repo)],
) -> ResourceNameResolver:
    return ResourceNameResolver(
        lookup_repo,
        profile_repo,
        id_length=get_settings().resource_label_id_length,
    )
