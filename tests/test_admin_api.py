"""HTTP tests for the audited platform-admin endpoints."""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_platform.models import AdminAuditLog

BASE = "/api/v1/admin/weddings"


@pytest.mark.asyncio
async def test_admin_lists_every_wedding(async_client: AsyncClient, async_session: AsyncSession, admin_headers, alice, bob) -> None:
    response = await async_client.get(BASE, params={"reason": "Monthly review"}, headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    by_subdomain = {item["subdomain"]: item for item in body["items"]}
    assert set(by_subdomain) == {"alice", "bob"}
    assert by_subdomain["alice"]["guest_count"] == 1
    assert by_subdomain["bob"]["tenant_id"] == str(bob.tenant_id)

    entries = (await async_session.execute(select(AdminAuditLog))).scalars().all()
    assert [(entry.operation, entry.justification) for entry in entries] == [
        ("list_weddings", "Monthly review")
    ]


@pytest.mark.asyncio
async def test_admin_reads_a_single_wedding(async_client: AsyncClient, admin_headers, alice, bob) -> None:
    response = await async_client.get(f"{BASE}/{bob.wedding_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["subdomain"] == "bob"
    assert response.json()["partner2_name"] == "Robin"


@pytest.mark.asyncio
async def test_admin_unknown_wedding(async_client: AsyncClient, admin_headers) -> None:
    response = await async_client.get(f"{BASE}/{uuid.uuid4()}", headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_couples_cannot_reach_admin_routes(async_client: AsyncClient, alice, bob) -> None:
    listing = await async_client.get(BASE, headers=alice.headers)
    detail = await async_client.get(f"{BASE}/{bob.wedding_id}", headers=alice.headers)
    anonymous = await async_client.get(BASE)

    assert listing.status_code == 403
    assert detail.status_code == 403
    assert anonymous.status_code == 401


@pytest.mark.asyncio
async def test_health_and_request_id(async_client: AsyncClient) -> None:
    response = await async_client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"] == "req-123"
