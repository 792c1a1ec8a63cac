"""Registered person and their health profile."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from health_registry.database import Base
from health_registry.utils.timestamps import utcnow


class PersonRecord(Base):
    """A person registered in the health-identity scheme.

    Keyed by the human-readable health identifier issued at registration.
    """

    __tablename__ = "persons"

    health_id: Mapped[str] = mapped_column(String(32), primary_key=True)

    # === Identity ===
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    date_of_birth: Mapped[str] = mapped_column(String(10), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True, index=True)
    blood_group: Mapped[str] = mapped_column(String(8), nullable=False)
    national_id: Mapped[str] = mapped_column(String(32), nullable=False)

    # === Status ===
    fingerprint_scanned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<PersonRecord(health_id={self.health_id}, email={self.email})>"


class HealthProfile(Base):
    """Clinical background captured at registration, one per person."""

    __tablename__ = "health_profiles"

    health_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("persons.health_id"),
        primary_key=True,
    )
    chronic_conditions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    allergies: Mapped[str] = mapped_column(Text, nullable=False, default="")
    emergency_contact: Mapped[str] = mapped_column(Text, nullable=False, default="")
    current_medication: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<HealthProfile(health_id={self.health_id})>"
