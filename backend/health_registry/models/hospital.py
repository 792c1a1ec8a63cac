"""Empaneled hospital reference data."""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from health_registry.database import Base
from health_registry.utils.timestamps import utcnow


class EmpaneledHospital(Base):
    """Institution pre-approved to provide covered treatment.

    Specialties and packages are stored as comma-separated tag strings so the
    directory search can match them with a plain substring filter.
    """

    __tablename__ = "empaneled_hospitals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    code: Mapped[str] = mapped_column(String(40), nullable=False, unique=True)

    address: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    postal_code: Mapped[str] = mapped_column(String(12), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(40), nullable=False, default="")

    specialties: Mapped[str] = mapped_column(Text, nullable=False, default="")
    packages: Mapped[str] = mapped_column(Text, nullable=False, default="")

    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<EmpaneledHospital(code={self.code}, name={self.name})>"
