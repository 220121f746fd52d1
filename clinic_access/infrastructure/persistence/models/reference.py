"""Clinical reference rows read to label audited resources.

These tables belong to the clinical record application; this package only
reads the columns it needs for display names.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from clinic_access.infrastructure.persistence.database import Base
from clinic_access.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Patient(CuidMixin, TimestampMixin, Base):
    """Table: patient."""

    __tablename__ = "patient"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)


class Doctor(CuidMixin, TimestampMixin, Base):
    """Table: doctor. Display name comes from the linked user profile."""

    __tablename__ = "doctor"

    user_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)


class Clinic(CuidMixin, TimestampMixin, Base):
    """Table: clinic."""

    __tablename__ = "clinic"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Appointment(CuidMixin, TimestampMixin, Base):
    """Table: appointment."""

    __tablename__ = "appointment"
