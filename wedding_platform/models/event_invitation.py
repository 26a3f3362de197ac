"""EventInvitation: a guest's RSVP for one event.

Owned through the guest, two hops away from the tenant.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from wedding_platform.models.enums import RsvpStatus

if TYPE_CHECKING:
    from wedding_platform.models.event import Event
    from wedding_platform.models.guest import Guest


class EventInvitation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "event_invitations"

    __tenant_parent__ = "guest"

    guest_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("guests.id", ondelete="CASCADE"), nullable=False
    )
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    rsvp_status: Mapped[RsvpStatus] = mapped_column(nullable=False, default=RsvpStatus.PENDING)
    plus_one_attending: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Relationships
    guest: Mapped[Guest] = relationship("Guest", back_populates="invitations", lazy="noload")
    event: Mapped[Event] = relationship("Event", back_populates="invitations", lazy="noload")

    __table_args__ = (
        UniqueConstraint("guest_id", "event_id", name="uq_event_invitations_guest_event"),
    )
