"""Audit log repository. Append-only; implements IAuditLogRepository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.dtos.audit_log import AuditEventCreate, AuditEventResult
from clinic_access.infrastructure.persistence.models.audit_log import AuditLog
from clinic_access.shared.utils.generators import generate_cuid


def _orm_to_result(row: AuditLog) -> AuditEventResult:
    """Map ORM to application DTO."""
    return AuditEventResult(
        id=row.id,
        user_id=row.user_id,
        action=row.action,
        resource_type=row.resource_type,
        resource_id=row.resource_id,
        details=row.details,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        request_id=row.request_id,
        created_at=row.created_at,
    )


def _conditions(
    *,
    user_id: str | None,
    action: str | None,
    resource_type: str | None,
    resource_id: str | None,
    start_date: datetime | None,
    end_date: datetime | None,
) -> list[Any]:
    conditions: list[Any] = []
    if user_id is not None:
        conditions.append(AuditLog.user_id == user_id)
    if action is not None:
        conditions.append(AuditLog.action == action)
    if resource_type is not None:
        conditions.append(AuditLog.resource_type == resource_type)
    if resource_id is not None:
        conditions.append(AuditLog.resource_id == resource_id)
    if start_date is not None:
        conditions.append(AuditLog.created_at >= start_date)
    if end_date is not None:
        conditions.append(AuditLog.created_at <= end_date)
    return conditions


class AuditLogRepository:
    """Append-only audit log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: AuditEventCreate) -> AuditEventResult:
        """Append one audit log entry inside a SAVEPOINT; return created record."""
        row = AuditLog(
            id=generate_cuid(),
            user_id=entry.user_id,
            action=entry.action,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            details=entry.details,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            request_id=entry.request_id,
        )
        async with self.db.begin_nested():
            self.db.add(row)
            await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def get_by_id(self, event_id: str) -> AuditEventResult | None:
        result = await self.db.execute(select(AuditLog).where(AuditLog.id == event_id))
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    async def list(
        self,
        *,
        user_id: str | None = None,
        action: str | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[AuditEventResult]:
        """List audit log entries matching all filters (newest first)."""
        conditions = _conditions(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            start_date=start_date,
            end_date=end_date,
        )
        stmt = (
            select(AuditLog)
            .where(*conditions)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def count(
        self,
        *,
        user_id: str | None = None,
        action: str | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> int:
        """Count entries matching all filters (before pagination)."""
        conditions = _conditions(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            start_date=start_date,
            end_date=end_date,
        )
        stmt = select(func.count()).select_from(AuditLog).where(*conditions)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())
