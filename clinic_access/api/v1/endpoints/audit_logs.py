"""Audit log API: query the trail (who did what, when, from where)."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from clinic_access.api.v1.dependencies import (
    get_audit_query_service,
    get_resource_name_resolver,
    require_permission,
)
from clinic_access.application.dtos.audit_log import AuditLogFilters
from clinic_access.application.services.audit_query_service import AuditQueryService
from clinic_access.application.services.resource_name_resolver import (
    ResourceNameResolver,
)
from clinic_access.domain.exceptions import ResourceNotFoundException
from clinic_access.schemas.audit_log import (
    AuditLogEntryResponse,
    AuditLogListResponse,
    ResourceNameResponse,
)

router = APIRouter()


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    response: Response,
    query_svc: Annotated[AuditQueryService, Depends(get_audit_query_service)],
    _: Annotated[str, Depends(require_permission("audit_log", "view"))],
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, description="Defaults to the configured page size"),
    user_id: str | None = Query(None, description="Filter by actor id"),
    action: str | None = Query(None, description="Filter by action (create, update, ...)"),
    resource_type: str | None = Query(None, description="Filter by resource type"),
    resource_id: str | None = Query(None, description="Filter by resource id"),
    start_date: datetime | None = Query(None, description="From (inclusive) ISO8601"),
    end_date: datetime | None = Query(None, description="To (inclusive) ISO8601"),
):
    """List audit events, newest first, with actor profiles. 503 when the store failed."""
    page = await query_svc.query(
        AuditLogFilters(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )
    )
    if not page.ok:
        response.status_code = 503
    return AuditLogListResponse(
        items=[AuditLogEntryResponse.from_enriched(i) for i in page.items],
        offset=page.offset,
        limit=page.limit,
        total=page.total,
        error=page.error,
    )


@router.get("/resource-name", response_model=ResourceNameResponse)
async def get_resource_name(
    resolver: Annotated[ResourceNameResolver, Depends(get_resource_name_resolver)],
    _: Annotated[str, Depends(require_permission("audit_log", "view"))],
    resource_type: str = Query(..., min_length=1),
    resource_id: str = Query(..., min_length=1),
):
    """Human-readable label for an audited resource (falls back to type + short id)."""
    name = await resolver.get_resource_name(resource_type, resource_id)
    return ResourceNameResponse(
        resource_type=resource_type, resource_id=resource_id, name=name
    )


@router.get("/{event_id}", response_model=AuditLogEntryResponse)
async def get_audit_log(
    event_id: str,
    query_svc: Annotated[AuditQueryService, Depends(get_audit_query_service)],
    _: Annotated[str, Depends(require_permission("audit_log", "view"))],
):
    """Return one audit event with its actor profile."""
    item = await query_svc.get_by_id(event_id)
    if item is None:
        raise ResourceNotFoundException("audit_log", event_id)
    return AuditLogEntryResponse.from_enriched(item)
