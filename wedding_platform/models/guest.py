from __future__ import annotations

import secrets
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from wedding_platform.models.event_invitation import EventInvitation
    from wedding_platform.models.wedding import Wedding


def generate_rsvp_code() -> str:
    return secrets.token_hex(4).upper()


class Guest(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "guests"

    __tenant_parent__ = "wedding"

    wedding_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("weddings.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    party_name: Mapped[str | None] = mapped_column(String(255))
    party_size: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    allow_plus_one: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rsvp_code: Mapped[str] = mapped_column(
        String(16), unique=True, nullable=False, default=generate_rsvp_code
    )

    # Relationships
    wedding: Mapped[Wedding] = relationship("Wedding", back_populates="guests", lazy="noload")
    invitations: Mapped[list[EventInvitation]] = relationship(
        "EventInvitation", back_populates="guest", lazy="noload"
    )

    __table_args__ = (
        CheckConstraint("party_size >= 1", name="ck_guests_party_size_positive"),
        Index("idx_guests_wedding_id", "wedding_id"),
    )
