"""EventService: wedding events and per-guest RSVPs."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from wedding_platform.exceptions import BusinessRuleException, NotFoundException
from wedding_platform.models.enums import RsvpStatus
from wedding_platform.models.event import Event
from wedding_platform.models.event_invitation import EventInvitation
from wedding_platform.models.guest import Guest
from wedding_platform.models.wedding import Wedding
from wedding_platform.modules.events.schemas import EventCreate, EventUpdate
from wedding_platform.modules.guests.service import SUMMARY_CACHE_KEY
from wedding_platform.modules.tenancy.cache import TenantCache
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.context import require_current_tenant

logger = logging.getLogger(__name__)


def _naive_utc(value: datetime) -> datetime:
    """Drop tzinfo after converting to UTC; stored values may come back naive."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class EventService:
    def __init__(self, client: TenantScopedClient, cache: TenantCache) -> None:
        self.client = client
        self.cache = cache

    async def list_events(self, public_only: bool = False) -> list[Event]:
        require_current_tenant()
        criteria = [Event.is_public.is_(True)] if public_only else []
        return await self.client.find_many(
            Event, *criteria, order_by=[Event.sort_order, Event.starts_at],
        )

    async def get_event(self, event_id: uuid.UUID) -> Event:
        event = await self.client.find_unique(Event, event_id)
        if event is None:
            raise NotFoundException(f"Event {event_id} not found")
        return event

    async def create_event(self, data: EventCreate) -> Event:
        require_current_tenant()
        wedding = await self.client.find_first(Wedding)
        if wedding is None:
            raise NotFoundException("Wedding not found")
        event = await self.client.create(Event, wedding_id=wedding.id, **data.model_dump())
        logger.info("Created event %s for wedding %s", event.id, wedding.id)
        return event

    async def update_event(self, event_id: uuid.UUID, data: EventUpdate) -> Event:
        event = await self.get_event(event_id)
        update_fields = data.model_dump(exclude_unset=True)
        if not update_fields:
            return event

        starts_at = update_fields.get("starts_at", event.starts_at)
        ends_at = update_fields.get("ends_at", event.ends_at)
        if starts_at is None:
            raise BusinessRuleException("starts_at cannot be cleared")
        if ends_at is not None and _naive_utc(ends_at) < _naive_utc(starts_at):
            raise BusinessRuleException("ends_at must not be before starts_at")

        result = await self.client.update(Event, event_id, **update_fields)
        if not result:
            raise NotFoundException(f"Event {event_id} not found")
        return await self.get_event(event_id)

    async def delete_event(self, event_id: uuid.UUID) -> None:
        result = await self.client.delete(Event, event_id)
        if not result:
            raise NotFoundException(f"Event {event_id} not found")
        # Its invitations go with it
        await self.cache.delete(SUMMARY_CACHE_KEY)

    async def list_invitations(self, guest_id: uuid.UUID) -> list[EventInvitation]:
        return await self.client.find_many(
            EventInvitation, EventInvitation.guest_id == guest_id,
        )

    async def set_rsvp(
        self,
        event_id: uuid.UUID,
        guest_id: uuid.UUID,
        rsvp_status: RsvpStatus,
        plus_one_attending: bool = False,
    ) -> EventInvitation:
        """Record a guest's answer for one event.

        Both the event and the guest are fetched through the scoped client
        first, so an RSVP can only link rows the current tenant owns.
        """
        event = await self.get_event(event_id)
        guest = await self.client.find_unique(Guest, guest_id)
        if guest is None:
            raise NotFoundException(f"Guest {guest_id} not found")
        if guest.wedding_id != event.wedding_id:
            raise NotFoundException(f"Event {event_id} not found")
        if plus_one_attending and not guest.allow_plus_one:
            raise BusinessRuleException("This guest was not invited with a plus-one")
        if rsvp_status is not RsvpStatus.ATTENDING:
            plus_one_attending = False

        responded_at = None if rsvp_status is RsvpStatus.PENDING else datetime.now(timezone.utc)
        invitation = await self.client.find_first(
            EventInvitation,
            EventInvitation.guest_id == guest.id,
            EventInvitation.event_id == event.id,
        )
        if invitation is None:
            invitation = await self.client.create(
                EventInvitation,
                guest_id=guest.id,
                event_id=event.id,
                rsvp_status=rsvp_status,
                plus_one_attending=plus_one_attending,
                responded_at=responded_at,
            )
        else:
            await self.client.update(
                EventInvitation,
                invitation.id,
                rsvp_status=rsvp_status,
                plus_one_attending=plus_one_attending,
                responded_at=responded_at,
            )
            invitation = await self.client.find_unique(EventInvitation, invitation.id)

        await self.cache.delete(SUMMARY_CACHE_KEY)
        logger.info("Recorded %s RSVP for guest %s on event %s", rsvp_status.value, guest.id, event.id)
        return invitation
