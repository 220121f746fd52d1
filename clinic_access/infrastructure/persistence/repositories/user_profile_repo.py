"""User profile repository (read-only). Implements IUserProfileRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.dtos.audit_log import ActorProfile
from clinic_access.infrastructure.persistence.models.user_profile import UserProfile


def _profile_to_result(p: UserProfile) -> ActorProfile:
    return ActorProfile(
        id=p.id,
        email=p.email,
        first_name=p.first_name,
        last_name=p.last_name,
    )


class UserProfileRepository:
    """Batched actor profile lookup for audit enrichment and doctor labels."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_ids(self, user_ids: set[str]) -> dict[str, ActorProfile]:
        if not user_ids:
            return {}
        result = await self.db.execute(
            select(UserProfile).where(UserProfile.id.in_(sorted(user_ids)))
        )
        return {p.id: _profile_to_result(p) for p in result.scalars().all()}

    async def get_by_id(self, user_id: str) -> ActorProfile | None:
        result = await self.db.execute(select(UserProfile).where(UserProfile.id == user_id))
        row = result.scalar_one_or_none()
        return _profile_to_result(row) if row else None
