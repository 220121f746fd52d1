"""Audit log persistence tests. Require Postgres migrated to head."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.dtos.audit_log import AuditLogFilters
from clinic_access.application.services.audit_query_service import AuditQueryService
from clinic_access.application.services.audit_recorder import AuditRecorder
from clinic_access.domain.exceptions import AuditLogImmutableException
from clinic_access.infrastructure.persistence.models import AuditLog, UserProfile
from clinic_access.infrastructure.persistence.repositories import (
    AuditLogRepository,
    UserProfileRepository,
)
from clinic_access.shared.context import RequestContext


def _resource_type() -> str:
    """Unique resource type per test so rows from other tests never match."""
    return f"it_{uuid.uuid4().hex[:10]}"


@pytest.mark.requires_db
async def test_recorder_persists_event(db_session: AsyncSession) -> None:
    """A recorded event is readable back with the same fields."""
    resource_type = _resource_type()
    ctx = RequestContext(
        actor_id="user-it", ip_address="10.1.2.3", user_agent="pytest", request_id="req-it"
    )
    result = await AuditRecorder(AuditLogRepository(db_session)).create(
        ctx, resource_type, "r-1", {"name": "Clinic A", "password": "x"}
    )
    assert result.success is True
    assert result.event is not None

    stored = await AuditLogRepository(db_session).get_by_id(result.event.id)
    assert stored is not None
    assert stored.user_id == "user-it"
    assert stored.action == "create"
    assert stored.details == {"name": "Clinic A", "password": "[REDACTED]"}
    assert stored.ip_address == "10.1.2.3"
    assert stored.request_id == "req-it"
    assert stored.created_at.tzinfo is not None


@pytest.mark.requires_db
async def test_pagination_is_newest_first(db_session: AsyncSession) -> None:
    """25 events; offset 10 limit 10 returns the 15th..6th most recent ids (by creation)."""
    resource_type = _resource_type()
    repo = AuditLogRepository(db_session)
    recorder = AuditRecorder(repo)
    created = []
    for i in range(25):
        res = await recorder.view(RequestContext(actor_id="user-it"), resource_type, f"r-{i}")
        assert res.event is not None
        created.append(res.event.id)

    page = await AuditQueryService(repo, UserProfileRepository(db_session)).query(
        AuditLogFilters(resource_type=resource_type, limit=10, offset=10)
    )

    assert page.total == 25
    assert [i.event.id for i in page.items] == list(reversed(created))[10:20]
    timestamps = [i.event.created_at for i in page.items]
    assert timestamps == sorted(timestamps, reverse=True)


@pytest.mark.requires_db
async def test_time_range_is_inclusive(db_session: AsyncSession) -> None:
    resource_type = _resource_type()
    base = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    for days in (0, 1, 2, 3):
        db_session.add(
            AuditLog(
                id=f"{resource_type}-{days}",
                action="view",
                resource_type=resource_type,
                created_at=base + timedelta(days=days),
            )
        )
    await db_session.flush()

    repo = AuditLogRepository(db_session)
    events = await repo.list(
        resource_type=resource_type,
        start_date=base + timedelta(days=1),
        end_date=base + timedelta(days=2),
    )
    assert [e.id for e in events] == [f"{resource_type}-2", f"{resource_type}-1"]
    assert await repo.count(resource_type=resource_type, start_date=base + timedelta(days=3)) == 1


@pytest.mark.requires_db
async def test_filters_combine(db_session: AsyncSession) -> None:
    resource_type = _resource_type()
    recorder = AuditRecorder(AuditLogRepository(db_session))
    await recorder.create(RequestContext(actor_id="u-a"), resource_type, "r-1")
    await recorder.update(RequestContext(actor_id="u-a"), resource_type, "r-1")
    await recorder.update(RequestContext(actor_id="u-b"), resource_type, "r-2")

    repo = AuditLogRepository(db_session)
    events = await repo.list(resource_type=resource_type, action="update", user_id="u-a")
    assert [(e.user_id, e.action, e.resource_id) for e in events] == [("u-a", "update", "r-1")]
    assert await repo.count(resource_type=resource_type, resource_id="r-1") == 2


@pytest.mark.requires_db
async def test_query_enriches_with_profiles(db_session: AsyncSession) -> None:
    resource_type = _resource_type()
    user_id = f"user-{uuid.uuid4().hex[:8]}"
    db_session.add(
        UserProfile(id=user_id, email="doc@clinic.test", first_name="Grace", last_name="Hopper")
    )
    await db_session.flush()
    repo = AuditLogRepository(db_session)
    recorder = AuditRecorder(repo)
    await recorder.view(RequestContext(actor_id=user_id), resource_type, "r-1")
    await recorder.view(RequestContext.system(), resource_type, "r-2")

    page = await AuditQueryService(repo, UserProfileRepository(db_session)).query(
        AuditLogFilters(resource_type=resource_type)
    )
    by_resource = {i.event.resource_id: i.actor for i in page.items}
    assert by_resource["r-1"].first_name == "Grace"
    assert by_resource["r-2"].is_empty


@pytest.mark.requires_db
async def test_orm_update_is_refused(db_session: AsyncSession) -> None:
    result = await AuditRecorder(AuditLogRepository(db_session)).create(
        RequestContext(actor_id="user-it"), _resource_type(), "r-1"
    )
    assert result.event is not None
    row = await db_session.get(AuditLog, result.event.id)
    assert row is not None
    with pytest.raises(AuditLogImmutableException):
        async with db_session.begin_nested():
            row.action = "tampered"
            await db_session.flush()


@pytest.mark.requires_db
async def test_database_trigger_refuses_bulk_update(db_session: AsyncSession) -> None:
    result = await AuditRecorder(AuditLogRepository(db_session)).create(
        RequestContext(actor_id="user-it"), _resource_type(), "r-1"
    )
    assert result.event is not None
    with pytest.raises(DBAPIError):
        async with db_session.begin_nested():
            await db_session.execute(
                update(AuditLog)
                .where(AuditLog.id == result.event.id)
                .values(action="tampered")
            )
