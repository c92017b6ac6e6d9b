"""SQLAlchemy ORM models for persistent tables."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from proptrack.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PropertyRow(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100))
    location: Mapped[str] = mapped_column(Text)
    url: Mapped[str] = mapped_column(Text)
    price_per_month: Mapped[float] = mapped_column(Float)
    rooms: Mapped[float] = mapped_column(Float)
    bathrooms: Mapped[float] = mapped_column(Float)
    square_meters: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="available")
    service_charge: Mapped[float | None] = mapped_column(Float, nullable=True)
    cleaning_fee: Mapped[float | None] = mapped_column(Float, nullable=True)
    commission_charge: Mapped[float | None] = mapped_column(Float, nullable=True)
    latitude: Mapped[float] = mapped_column(Float)
    longitude: Mapped[float] = mapped_column(Float)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)
    is_approximated: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (
        Index("ix_properties_created_at", "created_at"),
        CheckConstraint(
            "status IN ('available', 'contacted', 'talking', 'reserved', 'deleted')",
            name="ck_properties_status",
        ),
    )
