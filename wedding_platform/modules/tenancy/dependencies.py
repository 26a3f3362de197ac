"""FastAPI dependency functions for tenant context injection."""

import uuid

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_platform.database.session import get_db
from wedding_platform.exceptions import ForbiddenException
from wedding_platform.modules.tenancy.auth import AuthenticatedUser, get_current_user
from wedding_platform.modules.tenancy.cache import TenantCache
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.context import require_current_tenant


def get_client(db: AsyncSession = Depends(get_db)) -> TenantScopedClient:
    """The tenant-scoped data access client for this request."""
    return TenantScopedClient(db)


_tenant_cache = TenantCache()


def get_tenant_cache() -> TenantCache:
    return _tenant_cache


async def require_couple(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency for couple-facing routes."""
    if user.is_admin or user.tenant_id is None:
        raise ForbiddenException("This area is only available to couples")
    return user


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency for platform admin routes."""
    if not user.is_admin:
        raise ForbiddenException("Platform admin privileges required")
    return user


async def require_tenant(
    user: AuthenticatedUser = Depends(require_couple),
) -> uuid.UUID:
    """The tenant bound to this request.

    Raises MissingTenantContext (an internal error) if a couple reached the
    handler without a scope, which means the middleware is not installed.
    """
    return require_current_tenant()
