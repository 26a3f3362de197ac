from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from wedding_platform.models.enums import PhotoStatus

if TYPE_CHECKING:
    from wedding_platform.models.wedding import Wedding


class Photo(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "photos"

    __tenant_parent__ = "wedding"

    wedding_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("weddings.id", ondelete="CASCADE"), nullable=False
    )
    storage_key: Mapped[str] = mapped_column(String(500), nullable=False)
    caption: Mapped[str | None] = mapped_column(String(500))
    uploaded_by_name: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[PhotoStatus] = mapped_column(nullable=False, default=PhotoStatus.PENDING)

    wedding: Mapped[Wedding] = relationship("Wedding", back_populates="photos", lazy="noload")

    __table_args__ = (
        Index("idx_photos_wedding_id", "wedding_id"),
    )
