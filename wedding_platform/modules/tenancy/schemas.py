"""Pydantic schemas for signup, the current principal and admin audit."""

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from wedding_platform.models.enums import UserRole
from wedding_platform.modules.tenancy.constants import SUBDOMAIN_PATTERN


class AuditContext(BaseModel):
    """Context for admin cross-tenant access, recorded for audit compliance."""

    admin_user_id: uuid.UUID
    target_tenant_id: uuid.UUID | None = None
    justification: str = Field(..., min_length=1)
    operation: str


# ---------------------------------------------------------------------------
# Signup
# ---------------------------------------------------------------------------


class SignupRequest(BaseModel):
    subdomain: str = Field(..., min_length=3, max_length=63, pattern=SUBDOMAIN_PATTERN)
    partner1_name: str = Field(..., min_length=1, max_length=255)
    partner2_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    wedding_date: date | None = None


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    subdomain: str
    name: str
    custom_domain: str | None = None


class SignupResponse(BaseModel):
    tenant: TenantResponse
    wedding_id: uuid.UUID
    user_id: uuid.UUID


class MeResponse(BaseModel):
    user_id: uuid.UUID
    email: str
    role: UserRole
    tenant: TenantResponse | None = None
