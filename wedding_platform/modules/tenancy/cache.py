"""Tenant-scoped cache backed by Redis."""

import json
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from wedding_platform.config import settings
from wedding_platform.modules.tenancy.constants import CACHE_PREFIX, CACHE_TTL_DEFAULT
from wedding_platform.modules.tenancy.context import require_current_tenant

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TenantCache:
    """Redis-backed cache namespaced by the current tenant.

    Keys are prefixed with "tenant:{tenant_id}:" using the tenant bound to the
    calling context, so a couple can never read or overwrite another couple's
    entries. Calling it outside a tenant scope raises MissingTenantContext.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        self._redis = redis_client

    async def _get_redis(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(settings.redis_url, decode_responses=True)
        return self._redis

    def _make_key(self, key: str) -> str:
        return f"{CACHE_PREFIX}:{require_current_tenant()}:{key}"

    async def get(self, key: str) -> Any | None:
        """Get a cached value for the current tenant."""
        client = await self._get_redis()
        raw = await client.get(self._make_key(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int = CACHE_TTL_DEFAULT) -> None:
        """Set a cached value with a TTL (in seconds)."""
        client = await self._get_redis()
        await client.set(self._make_key(key), json.dumps(value, default=str), ex=ttl)

    async def delete(self, key: str) -> None:
        client = await self._get_redis()
        await client.delete(self._make_key(key))

    async def invalidate_tenant(self, tenant_id: uuid.UUID) -> int:
        """Delete all cached keys of ``tenant_id``.

        Administrative operation: takes the tenant explicitly instead of from
        the context. Returns the number of keys deleted.
        """
        client = await self._get_redis()
        pattern = f"{CACHE_PREFIX}:{tenant_id}:*"
        deleted_count = 0
        async for key in client.scan_iter(match=pattern, count=100):
            deleted_count += await client.delete(key)
        logger.info("Invalidated %d cache keys for tenant %s", deleted_count, tenant_id)
        return deleted_count

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        ttl: int = CACHE_TTL_DEFAULT,
    ) -> T:
        """Return cached value if present, otherwise compute via factory, cache, and return."""
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await factory()
        await self.set(key, value, ttl=ttl)
        return value
