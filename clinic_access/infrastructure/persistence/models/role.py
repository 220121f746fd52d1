"""Role ORM model. Named, global roles (Admin, Doctor, Nurse, ...)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from clinic_access.infrastructure.persistence.database import Base
from clinic_access.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Role(CuidMixin, TimestampMixin, Base):
    """Role. Table: role. Unique name."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
