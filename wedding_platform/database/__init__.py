from wedding_platform.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from wedding_platform.database.engine import async_session, engine
from wedding_platform.database.session import get_db
from wedding_platform.database.tenant import (
    TenantOwnership,
    audit_tenant_coverage,
    is_tenant_exempt,
    ownership_for,
    tenant_criteria,
    tenant_owned_models,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "async_session",
    "engine",
    "get_db",
    "TenantOwnership",
    "audit_tenant_coverage",
    "is_tenant_exempt",
    "ownership_for",
    "tenant_criteria",
    "tenant_owned_models",
]
