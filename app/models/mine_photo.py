from __future__ import annotations
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, ForeignKey, DateTime, UniqueConstraint, Index

from app.db.base import Base


class MinePhoto(Base):
    __tablename__ = "mine_photos"

    id: Mapped[int] = mapped_column(primary_key=True)
    mine_id: Mapped[int] = mapped_column(
        ForeignKey("mines.id", ondelete="CASCADE"), index=True
    )

    url: Mapped[str] = mapped_column(String(1024))
    order_index: Mapped[int] = mapped_column(Integer)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    mine = relationship("Mine", back_populates="photos")

    __table_args__ = (
        UniqueConstraint("mine_id", "order_index", name="uq_mine_photo_order"),
        Index("ix_mine_photos_mine_id_order", "mine_id", "order_index"),
    )
