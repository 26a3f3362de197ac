"""Create schema - tenants, accounts, weddings and tenant-owned children

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# --- Enum types ---
user_role_enum = sa.Enum("ADMIN", "COUPLE", name="userrole", create_type=True)
rsvp_status_enum = sa.Enum("PENDING", "ATTENDING", "DECLINED", name="rsvpstatus", create_type=True)
photo_status_enum = sa.Enum("PENDING", "APPROVED", "REJECTED", name="photostatus", create_type=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    # 1. tenants
    op.create_table(
        "tenants",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("subdomain", sa.String(63), unique=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("custom_domain", sa.String(255), unique=True, nullable=True),
        sa.Column("custom_domain_verified_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # 2. users (platform-level accounts; admins have no tenant)
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", user_role_enum, server_default="COUPLE", nullable=False),
        sa.Column("tenant_id", UUID(as_uuid=True), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_users_tenant_id", "users", ["tenant_id"])

    # 3. weddings (aggregate root, one per tenant)
    op.create_table(
        "weddings",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("tenant_id", UUID(as_uuid=True), sa.ForeignKey("tenants.id", ondelete="CASCADE"), unique=True, nullable=False),
        sa.Column("partner1_name", sa.String(255), nullable=False),
        sa.Column("partner2_name", sa.String(255), nullable=False),
        sa.Column("wedding_date", sa.Date, nullable=True),
        sa.Column("is_published", sa.Boolean, server_default="false", nullable=False),
        *_timestamps(),
    )

    # 4. guests
    op.create_table(
        "guests",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("wedding_id", UUID(as_uuid=True), sa.ForeignKey("weddings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("party_name", sa.String(255), nullable=True),
        sa.Column("party_size", sa.Integer, server_default="1", nullable=False),
        sa.Column("allow_plus_one", sa.Boolean, server_default="false", nullable=False),
        sa.Column("rsvp_code", sa.String(16), unique=True, nullable=False),
        *_timestamps(),
        sa.CheckConstraint("party_size >= 1", name="ck_guests_party_size_positive"),
    )
    op.create_index("idx_guests_wedding_id", "guests", ["wedding_id"])

    # 5. events
    op.create_table(
        "events",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("wedding_id", UUID(as_uuid=True), sa.ForeignKey("weddings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("dress_code", sa.String(255), nullable=True),
        sa.Column("is_public", sa.Boolean, server_default="true", nullable=False),
        sa.Column("sort_order", sa.Integer, server_default="0", nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_events_wedding_id", "events", ["wedding_id"])

    # 6. event_invitations (owned through guests)
    op.create_table(
        "event_invitations",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("guest_id", UUID(as_uuid=True), sa.ForeignKey("guests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("event_id", UUID(as_uuid=True), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rsvp_status", rsvp_status_enum, server_default="PENDING", nullable=False),
        sa.Column("plus_one_attending", sa.Boolean, server_default="false", nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("guest_id", "event_id", name="uq_event_invitations_guest_event"),
    )

    # 7. photos
    op.create_table(
        "photos",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("wedding_id", UUID(as_uuid=True), sa.ForeignKey("weddings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("storage_key", sa.String(500), nullable=False),
        sa.Column("caption", sa.String(500), nullable=True),
        sa.Column("uploaded_by_name", sa.String(255), nullable=True),
        sa.Column("status", photo_status_enum, server_default="PENDING", nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_photos_wedding_id", "photos", ["wedding_id"])

    # 8. admin_audit_log
    op.create_table(
        "admin_audit_log",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("admin_user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("target_tenant_id", UUID(as_uuid=True), sa.ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True),
        sa.Column("operation", sa.String(100), nullable=False),
        sa.Column("justification", sa.Text, nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("admin_audit_log")
    op.drop_table("photos")
    op.drop_table("event_invitations")
    op.drop_table("events")
    op.drop_table("guests")
    op.drop_table("weddings")
    op.drop_table("users")
    op.drop_table("tenants")
    photo_status_enum.drop(op.get_bind(), checkfirst=True)
    rsvp_status_enum.drop(op.get_bind(), checkfirst=True)
    user_role_enum.drop(op.get_bind(), checkfirst=True)
