"""Unit tests for AuditQueryService: filters, pagination bounds and actor enrichment."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from clinic_access.application.dtos.audit_log import (
    ActorProfile,
    AuditEventResult,
    AuditLogFilters,
)
from clinic_access.application.services.audit_query_service import AuditQueryService

T0 = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _event(event_id: str, user_id: str | None, minutes: int = 0) -> AuditEventResult:
    return AuditEventResult(
        id=event_id,
        user_id=user_id,
        action="view",
        resource_type="patient",
        resource_id="p-1",
        details=None,
        ip_address="10.0.0.1",
        user_agent="pytest",
        request_id=None,
        created_at=T0 - timedelta(minutes=minutes),
    )


def _repos(events: list[AuditEventResult], total: int | None = None):
    audit_repo = AsyncMock()
    audit_repo.list.return_value = events
    audit_repo.count.return_value = len(events) if total is None else total
    audit_repo.get_by_id.return_value = events[0] if events else None
    profile_repo = AsyncMock()
    profile_repo.get_by_ids.return_value = {
        "u1": ActorProfile(id="u1", email="ada@clinic.test", first_name="Ada", last_name="Lovelace"),
    }
    return audit_repo, profile_repo


async def test_query_passes_filters_and_enriches_actors() -> None:
    events = [_event("e2", "u1"), _event("e1", "u2", minutes=5)]
    audit_repo, profile_repo = _repos(events)
    svc = AuditQueryService(audit_repo, profile_repo)
    filters = AuditLogFilters(
        user_id="u1",
        action="view",
        resource_type="patient",
        start_date=T0 - timedelta(days=1),
        end_date=T0,
        limit=10,
        offset=5,
    )

    page = await svc.query(filters)

    assert page.ok
    assert page.total == 2
    assert (page.limit, page.offset) == (10, 5)
    audit_repo.list.assert_awaited_once_with(
        user_id="u1",
        action="view",
        resource_type="patient",
        resource_id=None,
        start_date=T0 - timedelta(days=1),
        end_date=T0,
        offset=5,
        limit=10,
    )
    profile_repo.get_by_ids.assert_awaited_once_with({"u1", "u2"})
    first, second = page.items
    assert first.event.id == "e2"
    assert first.actor.first_name == "Ada"
    # u2 has no profile row: event kept, profile empty
    assert second.actor.is_empty


async def test_query_uses_default_limit() -> None:
    audit_repo, profile_repo = _repos([])
    svc = AuditQueryService(audit_repo, profile_repo, default_limit=20)
    page = await svc.query(AuditLogFilters())
    assert page.limit == 20
    assert audit_repo.list.await_args.kwargs["limit"] == 20


async def test_query_caps_limit_at_maximum() -> None:
    audit_repo, profile_repo = _repos([])
    svc = AuditQueryService(audit_repo, profile_repo, default_limit=20, max_limit=100)
    page = await svc.query(AuditLogFilters(limit=10_000))
    assert page.limit == 100


async def test_query_treats_non_positive_limit_and_offset_as_defaults() -> None:
    audit_repo, profile_repo = _repos([])
    svc = AuditQueryService(audit_repo, profile_repo, default_limit=15)
    page = await svc.query(AuditLogFilters(limit=0, offset=-3))
    assert (page.limit, page.offset) == (15, 0)


async def test_query_without_total_skips_count() -> None:
    audit_repo, profile_repo = _repos([_event("e1", None)])
    svc = AuditQueryService(audit_repo, profile_repo)
    page = await svc.query(AuditLogFilters(include_total=False))
    assert page.total is None
    audit_repo.count.assert_not_awaited()


async def test_system_events_get_empty_profile_without_lookup() -> None:
    audit_repo, profile_repo = _repos([_event("e1", None)])
    page = await AuditQueryService(audit_repo, profile_repo).query(AuditLogFilters())
    assert page.items[0].actor == ActorProfile.empty()
    profile_repo.get_by_ids.assert_not_awaited()


async def test_store_fault_returns_empty_page_with_error() -> None:
    audit_repo, profile_repo = _repos([])
    audit_repo.list.side_effect = ConnectionError("db down")
    page = await AuditQueryService(audit_repo, profile_repo).query(AuditLogFilters(limit=5))
    assert not page.ok
    assert page.items == []
    assert page.total == 0
    assert page.error == "Failed to fetch audit logs"


async def test_profile_fault_keeps_events() -> None:
    audit_repo, profile_repo = _repos([_event("e1", "u1")])
    profile_repo.get_by_ids.side_effect = RuntimeError("profiles down")
    page = await AuditQueryService(audit_repo, profile_repo).query(AuditLogFilters())
    assert page.ok
    assert [i.event.id for i in page.items] == ["e1"]
    assert page.items[0].actor.is_empty


async def test_get_by_id_enriches_event() -> None:
    audit_repo, profile_repo = _repos([_event("e1", "u1")])
    item = await AuditQueryService(audit_repo, profile_repo).get_by_id("e1")
    assert item is not None
    assert item.actor.display_name == "Ada Lovelace"


async def test_get_by_id_missing_or_fault_returns_none() -> None:
    audit_repo, profile_repo = _repos([])
    svc = AuditQueryService(audit_repo, profile_repo)
    assert await svc.get_by_id("missing") is None
    audit_repo.get_by_id.side_effect = RuntimeError("db down")
    assert await svc.get_by_id("e1") is None


async def test_naive_date_bounds_are_treated_as_utc() -> None:
    audit_repo, profile_repo = _repos([])
    naive = datetime(2026, 10, 1, 8, 0)
    await AuditQueryService(audit_repo, profile_repo).query(AuditLogFilters(start_date=naive))
    assert audit_repo.list.await_args.kwargs["start_date"] == naive.replace(tzinfo=timezone.utc)
