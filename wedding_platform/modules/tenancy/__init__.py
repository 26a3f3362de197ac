"""Tenancy module: per-request tenant isolation."""

from wedding_platform.modules.tenancy.admin import with_admin_context
from wedding_platform.modules.tenancy.auth import (
    AuthenticatedUser,
    create_access_token,
    get_current_user,
)
from wedding_platform.modules.tenancy.client import Operation, TenantScopedClient, WriteResult
from wedding_platform.modules.tenancy.context import (
    get_current_tenant,
    require_current_tenant,
    run_with_tenant,
    tenant_scope,
    unscoped,
)
from wedding_platform.modules.tenancy.dependencies import (
    get_client,
    require_admin,
    require_couple,
    require_tenant,
)
from wedding_platform.modules.tenancy.middleware import TenantContextMiddleware
from wedding_platform.modules.tenancy.schemas import AuditContext

__all__ = [
    # Context
    "run_with_tenant",
    "get_current_tenant",
    "require_current_tenant",
    "tenant_scope",
    "unscoped",
    # Client
    "TenantScopedClient",
    "WriteResult",
    "Operation",
    # Schemas
    "AuditContext",
    # Auth
    "AuthenticatedUser",
    "create_access_token",
    "get_current_user",
    # Middleware
    "TenantContextMiddleware",
    # Dependencies
    "get_client",
    "require_admin",
    "require_couple",
    "require_tenant",
    # Admin
    "with_admin_context",
]
