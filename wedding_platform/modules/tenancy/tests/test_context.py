"""Unit tests for the request-scoped tenant context."""

import asyncio
import uuid

import pytest

from wedding_platform.exceptions import MissingTenantContext
from wedding_platform.modules.tenancy.context import (
    get_current_tenant,
    require_current_tenant,
    run_with_tenant,
    tenant_scope,
    unscoped,
)

TENANT_A = uuid.UUID("00000000-0000-0000-0000-00000000000a")
TENANT_B = uuid.UUID("00000000-0000-0000-0000-00000000000b")


def test_no_tenant_outside_any_scope():
    assert get_current_tenant() is None
    with pytest.raises(MissingTenantContext):
        require_current_tenant()


def test_run_with_tenant_sync_operation():
    result = run_with_tenant(TENANT_A, lambda suffix: f"{get_current_tenant()}-{suffix}", "x")

    assert result == f"{TENANT_A}-x"
    assert get_current_tenant() is None


def test_run_with_tenant_parses_string_ids():
    assert run_with_tenant(str(TENANT_A), require_current_tenant) == TENANT_A


@pytest.mark.parametrize("bad_id", ["", None])
def test_empty_tenant_id_is_rejected(bad_id):
    with pytest.raises(ValueError):
        run_with_tenant(bad_id, get_current_tenant)


def test_nested_scopes_restore_outer_tenant():
    observed = []

    def inner():
        observed.append(get_current_tenant())

    def outer():
        observed.append(get_current_tenant())
        run_with_tenant(TENANT_B, inner)
        observed.append(get_current_tenant())

    run_with_tenant(TENANT_A, outer)

    assert observed == [TENANT_A, TENANT_B, TENANT_A]
    assert get_current_tenant() is None


def test_scope_is_restored_when_operation_raises():
    def boom():
        raise RuntimeError("handler failed")

    with tenant_scope(TENANT_A):
        with pytest.raises(RuntimeError):
            run_with_tenant(TENANT_B, boom)
        assert get_current_tenant() == TENANT_A


def test_unscoped_clears_and_restores():
    with tenant_scope(TENANT_A) as bound:
        assert bound == TENANT_A
        with unscoped():
            assert get_current_tenant() is None
        assert get_current_tenant() == TENANT_A


@pytest.mark.asyncio
async def test_run_with_tenant_async_operation_keeps_scope_across_awaits():
    async def operation():
        before = get_current_tenant()
        await asyncio.sleep(0)
        return before, get_current_tenant()

    assert await run_with_tenant(TENANT_A, operation) == (TENANT_A, TENANT_A)
    assert get_current_tenant() is None


@pytest.mark.asyncio
async def test_async_nesting_restores_outer_tenant():
    async def inner():
        await asyncio.sleep(0)
        return get_current_tenant()

    async def outer():
        seen_inner = await run_with_tenant(TENANT_B, inner)
        return seen_inner, get_current_tenant()

    assert await run_with_tenant(TENANT_A, outer) == (TENANT_B, TENANT_A)


@pytest.mark.asyncio
async def test_async_exception_propagates():
    async def failing():
        await asyncio.sleep(0)
        raise LookupError("not here")

    with pytest.raises(LookupError):
        await run_with_tenant(TENANT_A, failing)
    assert get_current_tenant() is None


@pytest.mark.asyncio
async def test_concurrent_operations_do_not_share_tenant():
    async def observe(delay: float):
        await asyncio.sleep(delay)
        first = get_current_tenant()
        await asyncio.sleep(delay)
        return first, get_current_tenant()

    results = await asyncio.gather(
        run_with_tenant(TENANT_A, observe, 0.02),
        run_with_tenant(TENANT_B, observe, 0.01),
    )

    assert results == [(TENANT_A, TENANT_A), (TENANT_B, TENANT_B)]
