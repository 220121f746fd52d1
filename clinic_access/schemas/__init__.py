"""Pydantic request/response schemas for the API."""

from clinic_access.schemas.audit_log import (
    ActorProfileResponse,
    AuditLogEntryResponse,
    AuditLogListResponse,
    ResourceNameResponse,
)
from clinic_access.schemas.health import HealthResponse
from clinic_access.schemas.role import RoleChangeRequest, RoleChangeResponse, RoleResponse

__all__ = [
    "ActorProfileResponse",
    "AuditLogEntryResponse",
    "AuditLogListResponse",
    "HealthResponse",
    "ResourceNameResponse",
    "RoleChangeRequest",
    "RoleChangeResponse",
    "RoleResponse",
]
