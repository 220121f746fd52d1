"""User profile ORM model (read-only here; owned by the identity service)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from clinic_access.infrastructure.persistence.database import Base
from clinic_access.infrastructure.persistence.models.mixins import TimestampMixin


class UserProfile(TimestampMixin, Base):
    """Display identity of a user. Table: user_profile. id equals the auth user id."""

    __tablename__ = "user_profile"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
