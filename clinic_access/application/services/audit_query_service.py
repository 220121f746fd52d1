"""Audit query service: filtered, paginated, actor-enriched audit trail reads."""

from __future__ import annotations

from clinic_access.application.dtos.audit_log import (
    ActorProfile,
    AuditEventResult,
    AuditEventWithActor,
    AuditLogFilters,
    AuditLogPage,
)
from clinic_access.application.interfaces.repositories import (
    IAuditLogRepository,
    IUserProfileRepository,
)
from clinic_access.shared.telemetry.logging import get_logger
from clinic_access.shared.utils.datetime import ensure_utc

logger = get_logger(__name__)

_MSG_QUERY_FAILED = "Failed to fetch audit logs"


class AuditQueryService:
    """Serve the audit trail back, newest first, with actor profiles attached.

    Store faults on the event query yield an empty page with error set.
    Profile lookup faults only cost the enrichment: events are still returned
    with empty profiles.
    """

    def __init__(
        self,
        audit_repo: IAuditLogRepository,
        profile_repo: IUserProfileRepository,
        default_limit: int = 20,
        max_limit: int = 500,
    ) -> None:
        self.audit_repo = audit_repo
        self.profile_repo = profile_repo
        self.default_limit = default_limit
        self.max_limit = max_limit

    def _effective_limit(self, limit: int | None) -> int:
        if limit is None or limit <= 0:
            return self.default_limit
        return min(limit, self.max_limit)

    async def query(self, filters: AuditLogFilters) -> AuditLogPage:
        """Return one page of events matching all given filters."""
        limit = self._effective_limit(filters.limit)
        offset = max(filters.offset, 0)
        criteria = {
            "user_id": filters.user_id,
            "action": filters.action,
            "resource_type": filters.resource_type,
            "resource_id": filters.resource_id,
            "start_date": ensure_utc(filters.start_date),
            "end_date": ensure_utc(filters.end_date),
        }
        try:
            events = await self.audit_repo.list(**criteria, offset=offset, limit=limit)
            total = (
                await self.audit_repo.count(**criteria) if filters.include_total else None
            )
        except Exception:
            logger.exception("Error fetching audit logs")
            return AuditLogPage(
                items=[], total=0, limit=limit, offset=offset, error=_MSG_QUERY_FAILED
            )
        items = await self._enrich(events)
        return AuditLogPage(items=items, total=total, limit=limit, offset=offset)

    async def get_by_id(self, event_id: str) -> AuditEventWithActor | None:
        """Return one enriched event, or None when missing or on store fault."""
        try:
            event = await self.audit_repo.get_by_id(event_id)
        except Exception:
            logger.exception("Error fetching audit log %s", event_id)
            return None
        if event is None:
            return None
        enriched = await self._enrich([event])
        return enriched[0]

    async def _enrich(self, events: list[AuditEventResult]) -> list[AuditEventWithActor]:
        user_ids = {e.user_id for e in events if e.user_id}
        profiles: dict[str, ActorProfile] = {}
        if user_ids:
            try:
                profiles = await self.profile_repo.get_by_ids(user_ids)
            except Exception:
                logger.warning(
                    "Profile lookup failed for %d actor(s); returning events without profiles",
                    len(user_ids),
                    exc_info=True,
                )
        empty = ActorProfile.empty()
        return [
            AuditEventWithActor(
                event=e,
                actor=profiles.get(e.user_id, empty) if e.user_id else empty,
            )
            for e in events
        ]
