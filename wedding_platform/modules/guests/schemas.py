"""Pydantic v2 schemas for guest endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GuestCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    party_name: str | None = Field(None, max_length=255)
    party_size: int = Field(1, ge=1)
    allow_plus_one: bool = False


class GuestUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    party_name: str | None = Field(None, max_length=255)
    party_size: int | None = Field(None, ge=1)
    allow_plus_one: bool | None = None


class GuestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    wedding_id: uuid.UUID
    name: str
    email: str | None = None
    phone: str | None = None
    party_name: str | None = None
    party_size: int
    allow_plus_one: bool
    rsvp_code: str
    created_at: datetime


class GuestListResponse(BaseModel):
    items: list[GuestResponse]
    total: int
    limit: int
    offset: int


class GuestSummaryResponse(BaseModel):
    total_guests: int
    total_party_size: int
    attending: int
    declined: int
    pending: int
