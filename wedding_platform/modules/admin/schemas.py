import uuid
from datetime import date

from pydantic import BaseModel


class AdminWeddingResponse(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    subdomain: str
    partner1_name: str
    partner2_name: str
    wedding_date: date | None = None
    is_published: bool
    guest_count: int


class AdminWeddingListResponse(BaseModel):
    items: list[AdminWeddingResponse]
    total: int
