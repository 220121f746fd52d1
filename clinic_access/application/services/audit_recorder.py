"""Audit recorder: appends one audit event per call and never raises.

Audit writes are an observability side channel. A failed write is reported
through AuditWriteResult and a warning log; the caller's own operation is
never failed by it.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from clinic_access.application.dtos.audit_log import AuditEventCreate, AuditWriteResult
from clinic_access.application.interfaces.repositories import IAuditLogRepository
from clinic_access.application.services.change_log import (
    change_log_to_dict,
    create_change_log,
)
from clinic_access.core.constants import (
    AUDIT_REDACTED_VALUE,
    AUDIT_SENSITIVE_KEYS,
    AUTH_RESOURCE_TYPE,
)
from clinic_access.shared.context import RequestContext
from clinic_access.shared.enums import AuditAction
from clinic_access.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_JSON_SCALARS = (str, int, float, bool, type(None))


def sanitize_details(data: Mapping[str, Any]) -> dict[str, Any]:
    """Mask sensitive keys and coerce values to JSON-safe types (recursively)."""
    out: dict[str, Any] = {}
    for key, value in data.items():
        if str(key).lower() in AUDIT_SENSITIVE_KEYS:
            out[key] = AUDIT_REDACTED_VALUE
        else:
            out[key] = _sanitize_value(value)
    return out


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return sanitize_details(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_sanitize_value(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, _JSON_SCALARS):
        return value
    return str(value)


def _action_value(action: AuditAction | str) -> str:
    return action.value if isinstance(action, AuditAction) else str(action)


class AuditRecorder:
    """Append audit events built from an explicit RequestContext."""

    def __init__(self, audit_repo: IAuditLogRepository, unknown_value: str = "unknown") -> None:
        self.audit_repo = audit_repo
        self.unknown_value = unknown_value

    async def record(
        self,
        ctx: RequestContext,
        action: AuditAction | str,
        resource_type: str,
        resource_id: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> AuditWriteResult:
        """Persist one audit event.

        Missing ip address / user agent are stored as the unknown sentinel.
        Returns AuditWriteResult; any failure is captured, logged and returned.
        """
        try:
            ip_address, user_agent = ctx.transport_or(self.unknown_value)
            entry = AuditEventCreate(
                user_id=ctx.actor_id,
                action=_action_value(action),
                resource_type=resource_type,
                resource_id=resource_id,
                details=sanitize_details(details) if details else None,
                ip_address=ip_address,
                user_agent=user_agent,
                request_id=ctx.request_id,
            )
            event = await self.audit_repo.create(entry)
        except Exception as exc:
            logger.warning(
                "Failed to record audit event %s on %s/%s",
                _action_value(action),
                resource_type,
                resource_id,
                exc_info=True,
            )
            return AuditWriteResult.failed(str(exc) or exc.__class__.__name__)
        logger.debug(
            "Recorded audit event %s on %s/%s (actor: %s)",
            event.action,
            resource_type,
            resource_id,
            ctx.actor_id or ctx.actor_type.value,
        )
        return AuditWriteResult.ok(event)

    async def create(
        self,
        ctx: RequestContext,
        resource_type: str,
        resource_id: str,
        details: Mapping[str, Any] | None = None,
    ) -> AuditWriteResult:
        return await self.record(ctx, AuditAction.CREATE, resource_type, resource_id, details)

    async def update(
        self,
        ctx: RequestContext,
        resource_type: str,
        resource_id: str,
        details: Mapping[str, Any] | None = None,
    ) -> AuditWriteResult:
        return await self.record(ctx, AuditAction.UPDATE, resource_type, resource_id, details)

    async def delete(
        self,
        ctx: RequestContext,
        resource_type: str,
        resource_id: str,
        details: Mapping[str, Any] | None = None,
    ) -> AuditWriteResult:
        return await self.record(ctx, AuditAction.DELETE, resource_type, resource_id, details)

    async def view(
        self,
        ctx: RequestContext,
        resource_type: str,
        resource_id: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> AuditWriteResult:
        return await self.record(ctx, AuditAction.VIEW, resource_type, resource_id, details)

    async def login(
        self, ctx: RequestContext, details: Mapping[str, Any] | None = None
    ) -> AuditWriteResult:
        return await self.record(ctx, AuditAction.LOGIN, AUTH_RESOURCE_TYPE, ctx.actor_id, details)

    async def logout(
        self, ctx: RequestContext, details: Mapping[str, Any] | None = None
    ) -> AuditWriteResult:
        return await self.record(ctx, AuditAction.LOGOUT, AUTH_RESOURCE_TYPE, ctx.actor_id, details)

    async def custom(
        self,
        ctx: RequestContext,
        action: str,
        resource_type: str,
        resource_id: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> AuditWriteResult:
        """Record an action outside the standard verbs (e.g. 'export')."""
        return await self.record(ctx, action, resource_type, resource_id, details)

    async def record_update(
        self,
        ctx: RequestContext,
        resource_type: str,
        resource_id: str,
        before: Mapping[str, Any] | None,
        after: Mapping[str, Any] | None,
        extra: Mapping[str, Any] | None = None,
    ) -> AuditWriteResult:
        """Record an update, attaching {"changes": ...} only when fields differ."""
        details: dict[str, Any] = dict(extra or {})
        changes = change_log_to_dict(create_change_log(before, after))
        if changes is not None:
            details["changes"] = changes
        return await self.update(ctx, resource_type, resource_id, details or None)
