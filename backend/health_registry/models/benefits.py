"""Benefits-scheme enrollment."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from health_registry.database import Base
from health_registry.utils.timestamps import utcnow


class BenefitsEnrollment(Base):
    """A person's record in the health-coverage scheme.

    At most one row per person. Re-verification replaces the row in place.
    """

    __tablename__ = "benefits_enrollments"

    health_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("persons.health_id"),
        primary_key=True,
    )
    enrolled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    card_number: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)

    # === Household ===
    family_head_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    family_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    annual_income: Mapped[float | None] = mapped_column(Float, nullable=True)

    # === Coverage ===
    coverage_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    used_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    # === Address hierarchy ===
    state: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    district: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    block: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    village: Mapped[str] = mapped_column(String(120), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        CheckConstraint(
            "used_amount >= 0 AND used_amount <= coverage_amount",
            name="ck_benefits_used_within_coverage",
        ),
    )

    @property
    def remaining_amount(self) -> float:
        return self.coverage_amount - self.used_amount

    def __repr__(self) -> str:
        return f"<BenefitsEnrollment(health_id={self.health_id}, card_number={self.card_number})>"
