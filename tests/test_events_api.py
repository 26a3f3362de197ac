"""HTTP tests for wedding events and couple-side RSVP management."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_platform.models import Event

BASE = "/api/v1/events"

BRUNCH = {
    "name": "Farewell Brunch",
    "starts_at": "2026-06-21T10:00:00Z",
    "ends_at": "2026-06-21T13:00:00Z",
    "location": "Garden Cafe",
    "sort_order": 2,
}


@pytest.mark.asyncio
async def test_create_and_list_events(async_client: AsyncClient, alice, bob) -> None:
    created = await async_client.post(BASE, json=BRUNCH, headers=alice.headers)

    assert created.status_code == 201
    assert created.json()["wedding_id"] == str(alice.wedding_id)

    alice_events = await async_client.get(BASE, headers=alice.headers)
    bob_events = await async_client.get(BASE, headers=bob.headers)
    assert [event["name"] for event in alice_events.json()] == ["Ceremony", "Farewell Brunch"]
    assert [event["name"] for event in bob_events.json()] == ["Ceremony"]


@pytest.mark.asyncio
async def test_event_must_not_end_before_it_starts(async_client: AsyncClient, alice) -> None:
    payload = {**BRUNCH, "ends_at": "2026-06-21T09:00:00Z"}
    response = await async_client.post(BASE, json=payload, headers=alice.headers)

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_foreign_event_is_not_found(async_client: AsyncClient, alice, bob) -> None:
    url = f"{BASE}/{bob.event_id}"

    assert (await async_client.get(url, headers=alice.headers)).status_code == 404
    assert (await async_client.patch(url, json={"name": "Mine now"}, headers=alice.headers)).status_code == 404
    assert (await async_client.delete(url, headers=alice.headers)).status_code == 404

    bob_view = await async_client.get(url, headers=bob.headers)
    assert bob_view.json()["name"] == "Ceremony"


@pytest.mark.asyncio
async def test_update_own_event(async_client: AsyncClient, alice) -> None:
    response = await async_client.patch(
        f"{BASE}/{alice.event_id}", json={"dress_code": "Black tie"}, headers=alice.headers
    )

    assert response.status_code == 200
    assert response.json()["dress_code"] == "Black tie"


@pytest.mark.asyncio
async def test_rsvp_for_own_guest(async_client: AsyncClient, alice) -> None:
    url = f"{BASE}/{alice.event_id}/invitations/{alice.guest_id}"

    accepted = await async_client.put(
        url, json={"rsvp_status": "ATTENDING", "plus_one_attending": True}, headers=alice.headers
    )
    assert accepted.status_code == 200
    assert accepted.json()["rsvp_status"] == "ATTENDING"
    assert accepted.json()["plus_one_attending"] is True
    assert accepted.json()["responded_at"] is not None

    declined = await async_client.put(
        url, json={"rsvp_status": "DECLINED", "plus_one_attending": True}, headers=alice.headers
    )
    assert declined.status_code == 200
    assert declined.json()["id"] == accepted.json()["id"]
    assert declined.json()["rsvp_status"] == "DECLINED"
    assert declined.json()["plus_one_attending"] is False


@pytest.mark.asyncio
async def test_rsvp_cannot_link_foreign_rows(async_client: AsyncClient, alice, bob) -> None:
    body = {"rsvp_status": "ATTENDING"}

    foreign_guest = await async_client.put(
        f"{BASE}/{alice.event_id}/invitations/{bob.guest_id}", json=body, headers=alice.headers
    )
    foreign_event = await async_client.put(
        f"{BASE}/{bob.event_id}/invitations/{alice.guest_id}", json=body, headers=alice.headers
    )

    assert foreign_guest.status_code == 404
    assert foreign_event.status_code == 404


@pytest.mark.asyncio
async def test_plus_one_requires_permission(async_client: AsyncClient, alice) -> None:
    guest = await async_client.post(
        "/api/v1/guests", json={"name": "Plus-less Pat"}, headers=alice.headers
    )
    url = f"{BASE}/{alice.event_id}/invitations/{guest.json()['id']}"

    response = await async_client.put(
        url, json={"rsvp_status": "ATTENDING", "plus_one_attending": True}, headers=alice.headers
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "BUSINESS_RULE_VIOLATION"


@pytest.mark.asyncio
async def test_patch_cannot_end_event_before_it_starts(async_client: AsyncClient, async_session: AsyncSession, alice) -> None:
    url = f"{BASE}/{alice.event_id}"

    response = await async_client.patch(
        url, json={"ends_at": "2026-06-20T14:00:00Z", "location": "Beach"}, headers=alice.headers
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "BUSINESS_RULE_VIOLATION"
    event = await async_session.get(Event, alice.event_id)
    assert event.ends_at is None
    assert event.location == "Town Hall"


@pytest.mark.asyncio
async def test_patch_moving_start_past_end_is_rejected(async_client: AsyncClient, alice) -> None:
    url = f"{BASE}/{alice.event_id}"
    ok = await async_client.patch(url, json={"ends_at": "2026-06-20T18:00:00Z"}, headers=alice.headers)
    assert ok.status_code == 200

    response = await async_client.patch(url, json={"starts_at": "2026-06-20T19:00:00Z"}, headers=alice.headers)

    assert response.status_code == 422
    assert (await async_client.get(url, headers=alice.headers)).json()["starts_at"].startswith("2026-06-20T15:00:00")


@pytest.mark.asyncio
async def test_rsvp_refreshes_guest_summary(async_client: AsyncClient, alice, bob, redis_store) -> None:
    summary_url = "/api/v1/guests/summary"
    before = (await async_client.get(summary_url, headers=alice.headers)).json()
    assert before["attending"] == 0

    rsvp = await async_client.put(
        f"{BASE}/{alice.event_id}/invitations/{alice.guest_id}",
        json={"rsvp_status": "ATTENDING"},
        headers=alice.headers,
    )
    assert rsvp.status_code == 200

    after = (await async_client.get(summary_url, headers=alice.headers)).json()
    assert after["attending"] == 1

    deleted = await async_client.delete(f"{BASE}/{alice.event_id}", headers=alice.headers)
    assert deleted.status_code == 204

    after_delete = (await async_client.get(summary_url, headers=alice.headers)).json()
    assert after_delete["attending"] == 0
    assert set(redis_store) == {f"tenant:{alice.tenant_id}:guests:summary"}
