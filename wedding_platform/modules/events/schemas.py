"""Pydantic v2 schemas for event and RSVP endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wedding_platform.models.enums import RsvpStatus


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    starts_at: datetime
    ends_at: datetime | None = None
    location: str | None = Field(None, max_length=255)
    address: str | None = None
    dress_code: str | None = Field(None, max_length=255)
    is_public: bool = True
    sort_order: int = 0

    @model_validator(mode="after")
    def _check_times(self) -> "EventCreate":
        if self.ends_at is not None and self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be before starts_at")
        return self


class EventUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    location: str | None = Field(None, max_length=255)
    address: str | None = None
    dress_code: str | None = Field(None, max_length=255)
    is_public: bool | None = None
    sort_order: int | None = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    wedding_id: uuid.UUID
    name: str
    starts_at: datetime
    ends_at: datetime | None = None
    location: str | None = None
    address: str | None = None
    dress_code: str | None = None
    is_public: bool
    sort_order: int


class RsvpRequest(BaseModel):
    rsvp_status: RsvpStatus
    plus_one_attending: bool = False


class InvitationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    guest_id: uuid.UUID
    event_id: uuid.UUID
    rsvp_status: RsvpStatus
    plus_one_attending: bool
    responded_at: datetime | None = None
