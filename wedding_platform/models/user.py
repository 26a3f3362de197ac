from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from wedding_platform.models.enums import UserRole


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    # Accounts are platform-level: sign-in resolves the tenant, not the other way round
    __tenant_exempt__ = True

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(nullable=False, default=UserRole.COUPLE)
    tenant_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE")
    )

    __table_args__ = (
        Index("idx_users_tenant_id", "tenant_id"),
    )
