"""Platform admin API router: cross-tenant, audited."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from wedding_platform.modules.admin.schemas import AdminWeddingListResponse, AdminWeddingResponse
from wedding_platform.modules.admin.service import AdminService
from wedding_platform.modules.tenancy.auth import AuthenticatedUser
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.dependencies import get_client, require_admin

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(
    admin: AuthenticatedUser = Depends(require_admin),
    client: TenantScopedClient = Depends(get_client),
) -> AdminService:
    return AdminService(client, admin)


@router.get("/weddings", response_model=AdminWeddingListResponse)
async def list_weddings(
    reason: str = Query("weddings overview", min_length=1, max_length=500),
    service: AdminService = Depends(get_admin_service),
):
    rows = await service.list_weddings(justification=reason)
    return AdminWeddingListResponse(items=rows, total=len(rows))


@router.get("/weddings/{wedding_id}", response_model=AdminWeddingResponse)
async def get_wedding(
    wedding_id: uuid.UUID,
    reason: str = Query("wedding detail", min_length=1, max_length=500),
    service: AdminService = Depends(get_admin_service),
):
    return await service.get_wedding(wedding_id, justification=reason)
