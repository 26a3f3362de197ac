"""GuestService: guest list management for the current tenant's wedding."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, or_

from wedding_platform.config import settings
from wedding_platform.exceptions import NotFoundException
from wedding_platform.models.enums import RsvpStatus
from wedding_platform.models.event_invitation import EventInvitation
from wedding_platform.models.guest import Guest
from wedding_platform.models.wedding import Wedding
from wedding_platform.modules.guests.schemas import GuestCreate, GuestUpdate
from wedding_platform.modules.tenancy.cache import TenantCache
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.context import require_current_tenant

logger = logging.getLogger(__name__)

SUMMARY_CACHE_KEY = "guests:summary"


class GuestService:
    def __init__(self, client: TenantScopedClient, cache: TenantCache) -> None:
        self.client = client
        self.cache = cache

    async def get_wedding(self) -> Wedding:
        """The wedding of the tenant bound to this request."""
        require_current_tenant()
        wedding = await self.client.find_first(Wedding)
        if wedding is None:
            raise NotFoundException("Wedding not found")
        return wedding

    async def list_guests(
        self,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Guest], int]:
        require_current_tenant()
        criteria = []
        if search:
            pattern = f"%{search}%"
            criteria.append(
                or_(Guest.name.ilike(pattern), Guest.email.ilike(pattern), Guest.party_name.ilike(pattern))
            )
        total = await self.client.count(Guest, *criteria)
        guests = await self.client.find_many(
            Guest, *criteria, order_by=[Guest.name], limit=limit, offset=offset,
        )
        return guests, total

    async def get_guest(self, guest_id: uuid.UUID) -> Guest:
        guest = await self.client.find_unique(Guest, guest_id)
        if guest is None:
            raise NotFoundException(f"Guest {guest_id} not found")
        return guest

    async def create_guest(self, data: GuestCreate) -> Guest:
        wedding = await self.get_wedding()
        guest = await self.client.create(Guest, wedding_id=wedding.id, **data.model_dump())
        await self.cache.delete(SUMMARY_CACHE_KEY)
        logger.info("Created guest %s for wedding %s", guest.id, wedding.id)
        return guest

    async def update_guest(self, guest_id: uuid.UUID, data: GuestUpdate) -> Guest:
        update_fields = data.model_dump(exclude_unset=True)
        if update_fields:
            result = await self.client.update(Guest, guest_id, **update_fields)
            if not result:
                raise NotFoundException(f"Guest {guest_id} not found")
            await self.cache.delete(SUMMARY_CACHE_KEY)
        return await self.get_guest(guest_id)

    async def delete_guest(self, guest_id: uuid.UUID) -> None:
        result = await self.client.delete(Guest, guest_id)
        if not result:
            raise NotFoundException(f"Guest {guest_id} not found")
        await self.cache.delete(SUMMARY_CACHE_KEY)

    async def _compute_summary(self) -> dict:
        [(total_guests, total_party_size)] = await self.client.aggregate(
            Guest, func.count(Guest.id), func.coalesce(func.sum(Guest.party_size), 0),
        )
        statuses = {status: 0 for status in RsvpStatus}
        rows = await self.client.aggregate(
            EventInvitation,
            EventInvitation.rsvp_status,
            func.count(EventInvitation.id),
            group_by=[EventInvitation.rsvp_status],
        )
        for rsvp_status, invitation_count in rows:
            statuses[rsvp_status] = invitation_count
        return {
            "total_guests": total_guests,
            "total_party_size": int(total_party_size),
            "attending": statuses[RsvpStatus.ATTENDING],
            "declined": statuses[RsvpStatus.DECLINED],
            "pending": statuses[RsvpStatus.PENDING],
        }

    async def summary(self) -> dict:
        require_current_tenant()
        return await self.cache.get_or_set(
            SUMMARY_CACHE_KEY, self._compute_summary, ttl=settings.guest_summary_cache_ttl,
        )
