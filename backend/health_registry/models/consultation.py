"""Teleconsultation requests."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from health_registry.database import Base
from health_registry.utils.timestamps import utcnow


class ConsultationStatus(str, enum.Enum):
    """Consultation lifecycle. RESPONDED is terminal."""

    PENDING = "pending"
    RESPONDED = "responded"


class ConsultationRequest(Base):
    __tablename__ = "consultations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_health_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("persons.health_id"),
        nullable=False,
    )

    # === Request ===
    patient_name: Mapped[str] = mapped_column(String(200), nullable=False)
    subject: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    urgency: Mapped[str] = mapped_column(String(40), nullable=False)
    preferred_language: Mapped[str] = mapped_column(String(60), nullable=False)
    # JSON-encoded list of medical image ids
    attached_images: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # === Status ===
    status: Mapped[ConsultationStatus] = mapped_column(
        Enum(
            ConsultationStatus,
            name="consultation_status",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=ConsultationStatus.PENDING,
    )
    doctor_response: Mapped[str | None] = mapped_column(Text, nullable=True)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("idx_consultation_owner_submitted", "owner_health_id", "submitted_at"),)

    def __repr__(self) -> str:
        return f"<ConsultationRequest(id={self.id}, status={self.status}, subject={self.subject[:30]})>"
