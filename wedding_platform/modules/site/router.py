"""Public wedding site router.

Visitors are anonymous: the tenant comes from the Host header (subdomain or
verified custom domain) and the rest of the request runs inside that tenant's
scope, so a guest's RSVP code only resolves on their own couple's site.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Request

from wedding_platform.exceptions import NotFoundException
from wedding_platform.models.guest import Guest
from wedding_platform.models.tenant import Tenant
from wedding_platform.models.wedding import Wedding
from wedding_platform.modules.events.schemas import EventResponse, InvitationResponse, RsvpRequest
from wedding_platform.modules.events.service import EventService
from wedding_platform.modules.site.schemas import GuestRsvpResponse, SiteResponse
from wedding_platform.modules.tenancy.cache import TenantCache
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.context import tenant_scope
from wedding_platform.modules.tenancy.dependencies import get_client, get_tenant_cache
from wedding_platform.modules.tenancy.service import TenancyService

router = APIRouter(prefix="/site", tags=["site"])


async def resolve_site_tenant(
    request: Request,
    client: TenantScopedClient = Depends(get_client),
) -> Tenant:
    tenant = await TenancyService(client).resolve_host(request.headers.get("host", ""))
    if tenant is None:
        raise NotFoundException("Wedding site not found")
    return tenant


async def _published_wedding(client: TenantScopedClient) -> Wedding:
    wedding = await client.find_first(Wedding)
    if wedding is None or not wedding.is_published:
        raise NotFoundException("Wedding site not found")
    return wedding


async def _guest_by_code(client: TenantScopedClient, rsvp_code: str) -> Guest:
    guest = await client.find_unique(Guest, rsvp_code=rsvp_code.strip().upper())
    if guest is None:
        raise NotFoundException("RSVP code not found")
    return guest


@router.get("", response_model=SiteResponse)
async def get_site(
    tenant: Tenant = Depends(resolve_site_tenant),
    client: TenantScopedClient = Depends(get_client),
    cache: TenantCache = Depends(get_tenant_cache),
):
    with tenant_scope(tenant.id):
        wedding = await _published_wedding(client)
        events = await EventService(client, cache).list_events(public_only=True)
    return SiteResponse(
        subdomain=tenant.subdomain,
        partner1_name=wedding.partner1_name,
        partner2_name=wedding.partner2_name,
        wedding_date=wedding.wedding_date,
        events=[EventResponse.model_validate(event) for event in events],
    )


@router.get("/rsvp/{rsvp_code}", response_model=GuestRsvpResponse)
async def lookup_rsvp(
    rsvp_code: str,
    tenant: Tenant = Depends(resolve_site_tenant),
    client: TenantScopedClient = Depends(get_client),
    cache: TenantCache = Depends(get_tenant_cache),
):
    with tenant_scope(tenant.id):
        await _published_wedding(client)
        guest = await _guest_by_code(client, rsvp_code)
        invitations = await EventService(client, cache).list_invitations(guest.id)
    return GuestRsvpResponse(
        guest_id=guest.id,
        name=guest.name,
        allow_plus_one=guest.allow_plus_one,
        invitations=[InvitationResponse.model_validate(invitation) for invitation in invitations],
    )


@router.put("/rsvp/{rsvp_code}/events/{event_id}", response_model=InvitationResponse)
async def respond_rsvp(
    rsvp_code: str,
    event_id: uuid.UUID,
    body: RsvpRequest,
    tenant: Tenant = Depends(resolve_site_tenant),
    client: TenantScopedClient = Depends(get_client),
    cache: TenantCache = Depends(get_tenant_cache),
):
    with tenant_scope(tenant.id):
        await _published_wedding(client)
        guest = await _guest_by_code(client, rsvp_code)
        return await EventService(client, cache).set_rsvp(
            event_id, guest.id, body.rsvp_status, plus_one_attending=body.plus_one_attending,
        )
