"""Schemas for the public wedding site."""

import uuid
from datetime import date

from pydantic import BaseModel

from wedding_platform.modules.events.schemas import EventResponse, InvitationResponse


class SiteResponse(BaseModel):
    subdomain: str
    partner1_name: str
    partner2_name: str
    wedding_date: date | None = None
    events: list[EventResponse]


class GuestRsvpResponse(BaseModel):
    guest_id: uuid.UUID
    name: str
    allow_plus_one: bool
    invitations: list[InvitationResponse]
