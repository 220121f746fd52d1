"""Human-readable labels for audited resources."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from clinic_access.application.interfaces.repositories import (
    IResourceLookupRepository,
    IUserProfileRepository,
)
from clinic_access.shared.telemetry.logging import get_logger
from clinic_access.shared.utils.generators import short_id

logger = get_logger(__name__)

LabelLookup = Callable[[str], Awaitable[str]]


class ResourceNameResolver:
    """Resolve (resource_type, resource_id) to a display label. Never raises.

    Type-specific lookups live in a registry; unregistered types and lookup
    failures fall back to "<type> #<short id>".
    """

    def __init__(
        self,
        lookup_repo: IResourceLookupRepository,
        profile_repo: IUserProfileRepository,
        id_length: int = 8,
    ) -> None:
        self.lookup_repo = lookup_repo
        self.profile_repo = profile_repo
        self.id_length = id_length
        self._lookups: dict[str, LabelLookup] = {
            "patient": self._patient_label,
            "doctor": self._doctor_label,
            "appointment": self._appointment_label,
            "clinic": self._clinic_label,
        }

    def register(self, resource_type: str, lookup: LabelLookup) -> None:
        """Add or replace the label lookup for a resource type."""
        self._lookups[resource_type] = lookup

    def fallback_label(self, resource_type: str, resource_id: str | None) -> str:
        return f"{resource_type} #{short_id(resource_id or '', self.id_length)}"

    async def get_resource_name(self, resource_type: str, resource_id: str | None) -> str:
        # Audit events may carry no resource id (login, custom actions).
        lookup = self._lookups.get(resource_type)
        if lookup is None or not resource_id:
            return self.fallback_label(resource_type, resource_id)
        try:
            return await lookup(resource_id)
        except Exception:
            logger.warning(
                "Error resolving name for %s %s", resource_type, resource_id, exc_info=True
            )
            return self.fallback_label(resource_type, resource_id)

    async def _patient_label(self, resource_id: str) -> str:
        name = await self.lookup_repo.get_patient_name(resource_id)
        if name is None:
            return "Unknown Patient"
        return f"{name[0]} {name[1]}"

    async def _doctor_label(self, resource_id: str) -> str:
        user_id = await self.lookup_repo.get_doctor_user_id(resource_id)
        profile = await self.profile_repo.get_by_id(user_id) if user_id else None
        if profile is None:
            return "Unknown Doctor"
        return f"Dr. {profile.first_name} {profile.last_name}"

    async def _appointment_label(self, resource_id: str) -> str:
        appointment_id = await self.lookup_repo.get_appointment_id(resource_id)
        if appointment_id is None:
            return "Unknown Appointment"
        return f"Appointment #{short_id(appointment_id, self.id_length)}"

    async def _clinic_label(self, resource_id: str) -> str:
        name = await self.lookup_repo.get_clinic_name(resource_id)
        return name if name is not None else "Unknown Clinic"
