"""Tenancy module API router: signup and current-principal endpoints."""

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from wedding_platform.config import settings
from wedding_platform.modules.tenancy.auth import AuthenticatedUser, get_current_user
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.dependencies import get_client
from wedding_platform.modules.tenancy.schemas import (
    MeResponse,
    SignupRequest,
    SignupResponse,
    TenantResponse,
)
from wedding_platform.modules.tenancy.service import TenancyService

router = APIRouter(prefix="/tenancy", tags=["tenancy"])

limiter = Limiter(key_func=get_remote_address)


@router.post("/signup", response_model=SignupResponse, status_code=201)
@limiter.limit(settings.signup_rate_limit)
async def signup(
    request: Request,
    body: SignupRequest,
    client: TenantScopedClient = Depends(get_client),
):
    service = TenancyService(client)
    tenant, wedding, user = await service.signup(body)
    return SignupResponse(
        tenant=TenantResponse.model_validate(tenant),
        wedding_id=wedding.id,
        user_id=user.id,
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    client: TenantScopedClient = Depends(get_client),
):
    tenant = None
    if user.tenant_id is not None:
        tenant = await TenancyService(client).get_tenant(user.tenant_id)
    return MeResponse(
        user_id=user.id,
        email=user.email,
        role=user.role,
        tenant=TenantResponse.model_validate(tenant) if tenant else None,
    )
