from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from wedding_platform.models.event_invitation import EventInvitation
    from wedding_platform.models.wedding import Wedding


class Event(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "events"

    __tenant_parent__ = "wedding"

    wedding_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("weddings.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ends_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    location: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(Text)
    dress_code: Mapped[str | None] = mapped_column(String(255))
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    wedding: Mapped[Wedding] = relationship("Wedding", back_populates="events", lazy="noload")
    invitations: Mapped[list[EventInvitation]] = relationship(
        "EventInvitation", back_populates="event", lazy="noload"
    )

    __table_args__ = (
        Index("idx_events_wedding_id", "wedding_id"),
    )
