"""Wedding events API router."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response

from wedding_platform.modules.events.schemas import (
    EventCreate,
    EventResponse,
    EventUpdate,
    InvitationResponse,
    RsvpRequest,
)
from wedding_platform.modules.events.service import EventService
from wedding_platform.modules.tenancy.cache import TenantCache
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.dependencies import get_client, get_tenant_cache, require_tenant

router = APIRouter(prefix="/events", tags=["events"], dependencies=[Depends(require_tenant)])


def get_event_service(
    client: TenantScopedClient = Depends(get_client),
    cache: TenantCache = Depends(get_tenant_cache),
) -> EventService:
    return EventService(client, cache)


@router.get("", response_model=list[EventResponse])
async def list_events(service: EventService = Depends(get_event_service)):
    return await service.list_events()


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    body: EventCreate,
    service: EventService = Depends(get_event_service),
):
    return await service.create_event(body)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: uuid.UUID,
    service: EventService = Depends(get_event_service),
):
    return await service.get_event(event_id)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: uuid.UUID,
    body: EventUpdate,
    service: EventService = Depends(get_event_service),
):
    return await service.update_event(event_id, body)


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: uuid.UUID,
    service: EventService = Depends(get_event_service),
):
    await service.delete_event(event_id)
    return Response(status_code=204)


@router.put("/{event_id}/invitations/{guest_id}", response_model=InvitationResponse)
async def set_rsvp(
    event_id: uuid.UUID,
    guest_id: uuid.UUID,
    body: RsvpRequest,
    service: EventService = Depends(get_event_service),
):
    return await service.set_rsvp(
        event_id, guest_id, body.rsvp_status, plus_one_attending=body.plus_one_attending,
    )
