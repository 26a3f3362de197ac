"""Tenant model: the isolation boundary, one per couple."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from wedding_platform.models.wedding import Wedding


class Tenant(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "tenants"

    # Scoped on its own id: inside a scope only the bound tenant is visible
    __tenant_key__ = "id"
    # Public links and bookmarks are built from the subdomain
    __immutable_columns__ = ("subdomain",)

    subdomain: Mapped[str] = mapped_column(String(63), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    custom_domain: Mapped[str | None] = mapped_column(String(255), unique=True)
    custom_domain_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    wedding: Mapped[Wedding | None] = relationship("Wedding", back_populates="tenant", lazy="noload")
