"""Family members registered under a person."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from health_registry.database import Base
from health_registry.utils.timestamps import utcnow


class FamilyMember(Base):
    __tablename__ = "family_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_health_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("persons.health_id"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    relation: Mapped[str] = mapped_column(String(60), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    national_id: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    # Issued only when a national ID is supplied
    member_health_id: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (Index("idx_family_owner_created", "owner_health_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<FamilyMember(id={self.id}, owner={self.owner_health_id}, relation={self.relation})>"
