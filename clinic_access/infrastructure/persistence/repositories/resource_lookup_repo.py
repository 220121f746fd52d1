"""Read-only lookups used to label audited clinical resources."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.infrastructure.persistence.models.reference import (
    Appointment,
    Clinic,
    Doctor,
    Patient,
)


class ResourceLookupRepository:
    """Implements IResourceLookupRepository over the clinical reference tables."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_patient_name(self, patient_id: str) -> tuple[str, str] | None:
        result = await self.db.execute(
            select(Patient.first_name, Patient.last_name).where(Patient.id == patient_id)
        )
        row = result.one_or_none()
        return (row.first_name, row.last_name) if row else None

    async def get_doctor_user_id(self, doctor_id: str) -> str | None:
        result = await self.db.execute(select(Doctor.user_id).where(Doctor.id == doctor_id))
        return result.scalar_one_or_none()

    async def get_clinic_name(self, clinic_id: str) -> str | None:
        result = await self.db.execute(select(Clinic.name).where(Clinic.id == clinic_id))
        return result.scalar_one_or_none()

    async def get_appointment_id(self, appointment_id: str) -> str | None:
        result = await self.db.execute(
            select(Appointment.id).where(Appointment.id == appointment_id)
        )
        return result.scalar_one_or_none()
