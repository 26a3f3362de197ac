"""Admin context service for cross-tenant operations with audit logging."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from wedding_platform.models.audit import AdminAuditLog
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.context import unscoped
from wedding_platform.modules.tenancy.schemas import AuditContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_admin_context(
    client: TenantScopedClient,
    audit_context: AuditContext,
    callback: Callable[[TenantScopedClient], Awaitable[T]],
) -> T:
    """Execute a callback with tenant scoping bypassed, after writing an audit record.

    The audit entry is flushed BEFORE the bypass starts, in the caller's
    transaction, so no unscoped read is ever committed without its record.

    Args:
        client: The data access client for the current session.
        audit_context: Audit details for this admin operation.
        callback: An async callable that receives the client and returns a result.

    Returns:
        The result of the callback.
    """
    await client.create(
        AdminAuditLog,
        admin_user_id=audit_context.admin_user_id,
        target_tenant_id=audit_context.target_tenant_id,
        operation=audit_context.operation,
        justification=audit_context.justification,
    )

    logger.info(
        "Admin bypass enabled for user=%s targeting tenant=%s operation=%s",
        audit_context.admin_user_id,
        audit_context.target_tenant_id or "*",
        audit_context.operation,
    )
    with unscoped():
        return await callback(client)
