"""Medical images uploaded by a person."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from health_registry.database import Base
from health_registry.utils.timestamps import utcnow


class MedicalImage(Base):
    __tablename__ = "medical_images"

    image_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_health_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("persons.health_id"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    image_type: Mapped[str] = mapped_column(String(100), nullable=False)
    # Encoded payload, e.g. a base64 data URL
    data_url: Mapped[str] = mapped_column(Text, nullable=False)

    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<MedicalImage(image_id={self.image_id}, owner={self.owner_health_id})>"
