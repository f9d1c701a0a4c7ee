from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Float, ForeignKey, DateTime

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Mine(Base):
    __tablename__ = "mines"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(200), index=True, nullable=False)
    type: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    country: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    region: Mapped[Optional[str]] = mapped_column(String(200))
    production: Mapped[Optional[str]] = mapped_column(String(200))
    status: Mapped[str] = mapped_column(String(32), default="Active", index=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    website: Mapped[Optional[str]] = mapped_column(String(512))

    user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # --- Relationships ---
    photos: Mapped[List["MinePhoto"]] = relationship(
        back_populates="mine",
        cascade="all, delete-orphan",
        order_by="MinePhoto.order_index",
        lazy="selectin",
    )
    user: Mapped[Optional["User"]] = relationship("User", back_populates="mines", lazy="joined")
