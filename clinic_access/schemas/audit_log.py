"""Response schemas for the audit trail API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from clinic_access.application.dtos.audit_log import AuditEventWithActor


class ActorProfileResponse(BaseModel):
    """Actor display identity. All fields null when no profile exists."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class AuditLogEntryResponse(BaseModel):
    """Single audit event with its actor profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None
    created_at: datetime
    user: ActorProfileResponse

    @classmethod
    def from_enriched(cls, item: AuditEventWithActor) -> "AuditLogEntryResponse":
        e = item.event
        return cls(
            id=e.id,
            user_id=e.user_id,
            action=e.action,
            resource_type=e.resource_type,
            resource_id=e.resource_id,
            details=e.details,
            ip_address=e.ip_address,
            user_agent=e.user_agent,
            request_id=e.request_id,
            created_at=e.created_at,
            user=ActorProfileResponse.model_validate(item.actor),
        )


class AuditLogListResponse(BaseModel):
    """Paginated list of audit events. error is set when the store failed."""

    items: list[AuditLogEntryResponse]
    offset: int
    limit: int
    total: int | None = None
    error: str | None = None


class ResourceNameResponse(BaseModel):
    """Display label for an audited resource."""

    resource_type: str
    resource_id: str
    name: str = Field(..., description="Human-readable label")
