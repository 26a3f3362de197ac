from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class AdminAuditLog(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One row per admin operation that ran with tenant scoping bypassed."""

    __tablename__ = "admin_audit_log"

    __tenant_exempt__ = True

    admin_user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    target_tenant_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="SET NULL")
    )
    operation: Mapped[str] = mapped_column(String(100), nullable=False)
    justification: Mapped[str] = mapped_column(Text, nullable=False)
