"""Request-scoped tenant context.

The current tenant id lives in a ``ContextVar``. asyncio copies the context
into every task when the task is created, so a tenant bound around a request
follows that request across awaits and into any fan-out it starts, while
concurrently running requests each keep their own value.
"""

from __future__ import annotations

import inspect
import logging
import uuid
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TypeVar

from wedding_platform.exceptions import MissingTenantContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

_current_tenant: ContextVar[uuid.UUID | None] = ContextVar("current_tenant", default=None)


def _coerce_tenant_id(tenant_id: uuid.UUID | str) -> uuid.UUID:
    if isinstance(tenant_id, uuid.UUID):
        return tenant_id
    if not tenant_id:
        raise ValueError("tenant_id must be a non-empty tenant identifier")
    return uuid.UUID(str(tenant_id))


def get_current_tenant() -> uuid.UUID | None:
    """Return the tenant bound by the nearest enclosing scope, or None."""
    return _current_tenant.get()


def require_current_tenant() -> uuid.UUID:
    """Return the current tenant, raising MissingTenantContext when unscoped."""
    tenant_id = _current_tenant.get()
    if tenant_id is None:
        raise MissingTenantContext()
    return tenant_id


@contextmanager
def tenant_scope(tenant_id: uuid.UUID | str) -> Iterator[uuid.UUID]:
    """Bind ``tenant_id`` for the body of the ``with`` block.

    Scopes nest: leaving an inner scope restores whatever the outer scope bound.
    """
    token = _current_tenant.set(_coerce_tenant_id(tenant_id))
    try:
        yield _current_tenant.get()
    finally:
        _current_tenant.reset(token)


@contextmanager
def unscoped() -> Iterator[None]:
    """Clear the tenant for the body of the block (admin bypass)."""
    token = _current_tenant.set(None)
    try:
        yield
    finally:
        _current_tenant.reset(token)


async def _await_in_scope(tenant_id: uuid.UUID, awaitable: Awaitable[T]) -> T:
    with tenant_scope(tenant_id):
        return await awaitable


def run_with_tenant(
    tenant_id: uuid.UUID | str,
    operation: Callable[..., T] | Callable[..., Awaitable[T]],
    /,
    *args: Any,
    **kwargs: Any,
) -> T | Awaitable[T]:
    """Run ``operation(*args, **kwargs)`` with ``tenant_id`` as the current tenant.

    Synchronous operations run immediately and their result is returned.
    When the operation produces an awaitable (a coroutine function, or a plain
    callable returning a coroutine), an awaitable is returned instead; the
    scope is re-entered for the whole await, since a coroutine body only runs
    once it is awaited.
    """
    scoped_id = _coerce_tenant_id(tenant_id)
    with tenant_scope(scoped_id):
        result = operation(*args, **kwargs)
    if inspect.isawaitable(result):
        return _await_in_scope(scoped_id, result)
    return result
