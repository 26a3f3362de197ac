"""Guest list API router."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Response

from wedding_platform.modules.guests.schemas import (
    GuestCreate,
    GuestListResponse,
    GuestResponse,
    GuestSummaryResponse,
    GuestUpdate,
)
from wedding_platform.modules.guests.service import GuestService
from wedding_platform.modules.tenancy.cache import TenantCache
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.dependencies import get_client, get_tenant_cache, require_tenant

router = APIRouter(prefix="/guests", tags=["guests"], dependencies=[Depends(require_tenant)])


def get_guest_service(
    client: TenantScopedClient = Depends(get_client),
    cache: TenantCache = Depends(get_tenant_cache),
) -> GuestService:
    return GuestService(client, cache)


@router.get("", response_model=GuestListResponse)
async def list_guests(
    search: str | None = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: GuestService = Depends(get_guest_service),
):
    guests, total = await service.list_guests(search=search, limit=limit, offset=offset)
    return GuestListResponse(
        items=[GuestResponse.model_validate(guest) for guest in guests],
        total=total,
        limit=limit,
        offset=offset,
    )


# Static route BEFORE /{guest_id} to avoid path conflicts
@router.get("/summary", response_model=GuestSummaryResponse)
async def guest_summary(service: GuestService = Depends(get_guest_service)):
    return await service.summary()


@router.post("", response_model=GuestResponse, status_code=201)
async def create_guest(
    body: GuestCreate,
    service: GuestService = Depends(get_guest_service),
):
    return await service.create_guest(body)


@router.get("/{guest_id}", response_model=GuestResponse)
async def get_guest(
    guest_id: uuid.UUID,
    service: GuestService = Depends(get_guest_service),
):
    return await service.get_guest(guest_id)


@router.patch("/{guest_id}", response_model=GuestResponse)
async def update_guest(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    service: GuestService = Depends(get_guest_service),
):
    return await service.update_guest(guest_id, body)


@router.delete("/{guest_id}", status_code=204)
async def delete_guest(
    guest_id: uuid.UUID,
    service: GuestService = Depends(get_guest_service),
):
    await service.delete_guest(guest_id)
    return Response(status_code=204)
