"""Wedding model: the tenant-owned aggregate root."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from wedding_platform.models.event import Event
    from wedding_platform.models.guest import Guest
    from wedding_platform.models.photo import Photo
    from wedding_platform.models.tenant import Tenant


class Wedding(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "weddings"

    __tenant_key__ = "tenant_id"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    partner1_name: Mapped[str] = mapped_column(String(255), nullable=False)
    partner2_name: Mapped[str] = mapped_column(String(255), nullable=False)
    wedding_date: Mapped[date | None] = mapped_column(Date)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    tenant: Mapped[Tenant] = relationship("Tenant", back_populates="wedding", lazy="noload")
    guests: Mapped[list[Guest]] = relationship("Guest", back_populates="wedding", lazy="noload")
    events: Mapped[list[Event]] = relationship("Event", back_populates="wedding", lazy="noload")
    photos: Mapped[list[Photo]] = relationship("Photo", back_populates="wedding", lazy="noload")
