"""HTTP tests for public wedding sites resolved from the Host header."""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_platform.models import Tenant, Wedding

SITE = "/api/v1/site"


def _host(name: str) -> dict[str, str]:
    return {"Host": name}


@pytest.mark.asyncio
async def test_site_resolves_by_subdomain(async_client: AsyncClient, alice, bob) -> None:
    response = await async_client.get(SITE, headers=_host("alice.localhost"))

    assert response.status_code == 200
    body = response.json()
    assert body["subdomain"] == "alice"
    assert body["partner1_name"] == "Alice"
    assert [event["name"] for event in body["events"]] == ["Ceremony"]


@pytest.mark.asyncio
@pytest.mark.parametrize("host", ["carol.localhost", "deep.alice.localhost", "localhost", "example.org"])
async def test_unknown_hosts_are_not_found(async_client: AsyncClient, alice, host: str) -> None:
    response = await async_client.get(SITE, headers=_host(host))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unpublished_site_is_not_found(async_client: AsyncClient, async_session: AsyncSession, bob) -> None:
    await async_session.execute(
        update(Wedding).where(Wedding.id == bob.wedding_id).values(is_published=False)
    )
    await async_session.commit()

    response = await async_client.get(SITE, headers=_host("bob.localhost"))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_custom_domain_requires_verification(
    async_client: AsyncClient, async_session: AsyncSession, alice
) -> None:
    await async_session.execute(
        update(Tenant).where(Tenant.id == alice.tenant_id).values(custom_domain="alice-and-sam.com")
    )
    await async_session.commit()

    unverified = await async_client.get(SITE, headers=_host("alice-and-sam.com"))
    assert unverified.status_code == 404

    await async_session.execute(
        update(Tenant)
        .where(Tenant.id == alice.tenant_id)
        .values(custom_domain_verified_at=datetime.now(timezone.utc))
    )
    await async_session.commit()

    verified = await async_client.get(SITE, headers=_host("Alice-And-Sam.com:443"))
    assert verified.status_code == 200
    assert verified.json()["subdomain"] == "alice"


@pytest.mark.asyncio
async def test_site_ignores_the_visitor_login(async_client: AsyncClient, alice, bob) -> None:
    headers = {**_host("alice.localhost"), **bob.headers}
    response = await async_client.get(SITE, headers=headers)

    assert response.status_code == 200
    assert response.json()["subdomain"] == "alice"


@pytest.mark.asyncio
async def test_rsvp_code_lookup(async_client: AsyncClient, alice) -> None:
    response = await async_client.get(f"{SITE}/rsvp/alice001", headers=_host("alice.localhost"))

    assert response.status_code == 200
    body = response.json()
    assert body["guest_id"] == str(alice.guest_id)
    assert body["name"] == "Grandma Alice"
    assert body["invitations"] == []


@pytest.mark.asyncio
async def test_rsvp_code_only_resolves_on_its_own_site(async_client: AsyncClient, alice, bob) -> None:
    response = await async_client.get(f"{SITE}/rsvp/{bob.rsvp_code}", headers=_host("alice.localhost"))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_guest_responds_on_public_site(async_client: AsyncClient, alice, bob) -> None:
    url = f"{SITE}/rsvp/{alice.rsvp_code}/events/{alice.event_id}"
    response = await async_client.put(
        url, json={"rsvp_status": "ATTENDING"}, headers=_host("alice.localhost")
    )

    assert response.status_code == 200
    assert response.json()["rsvp_status"] == "ATTENDING"

    lookup = await async_client.get(f"{SITE}/rsvp/{alice.rsvp_code}", headers=_host("alice.localhost"))
    assert [item["event_id"] for item in lookup.json()["invitations"]] == [str(alice.event_id)]

    foreign_event = await async_client.put(
        f"{SITE}/rsvp/{alice.rsvp_code}/events/{bob.event_id}",
        json={"rsvp_status": "ATTENDING"},
        headers=_host("alice.localhost"),
    )
    assert foreign_event.status_code == 404


@pytest.mark.asyncio
async def test_public_rsvp_refreshes_the_couples_summary(async_client: AsyncClient, alice, redis_store) -> None:
    summary_url = "/api/v1/guests/summary"
    before = await async_client.get(summary_url, headers=alice.headers)
    assert before.json()["declined"] == 0

    answer = await async_client.put(
        f"{SITE}/rsvp/{alice.rsvp_code}/events/{alice.event_id}",
        json={"rsvp_status": "DECLINED"},
        headers=_host("alice.localhost"),
    )
    assert answer.status_code == 200

    after = await async_client.get(summary_url, headers=alice.headers)
    assert after.json()["declined"] == 1
