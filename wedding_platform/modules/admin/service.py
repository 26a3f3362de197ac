"""Platform-admin views across all tenants.

Every method runs through ``with_admin_context`` so the tenant bypass is
audited. Nothing here may be reachable from couple-facing routes.
"""

from __future__ import annotations

import uuid
from collections import Counter

from wedding_platform.exceptions import NotFoundException
from wedding_platform.models.guest import Guest
from wedding_platform.models.tenant import Tenant
from wedding_platform.models.wedding import Wedding
from wedding_platform.modules.tenancy.admin import with_admin_context
from wedding_platform.modules.tenancy.auth import AuthenticatedUser
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.schemas import AuditContext


class AdminService:
    def __init__(self, client: TenantScopedClient, admin: AuthenticatedUser) -> None:
        self.client = client
        self.admin = admin

    async def _guest_counts(self, wedding_ids: list[uuid.UUID]) -> dict[uuid.UUID, int]:
        if not wedding_ids:
            return {}
        guests = await self.client.find_many(Guest, Guest.wedding_id.in_(wedding_ids))
        return dict(Counter(guest.wedding_id for guest in guests))

    async def _rows(self, weddings: list[Wedding]) -> list[dict]:
        tenant_ids = [wedding.tenant_id for wedding in weddings]
        tenants = {
            tenant.id: tenant
            for tenant in await self.client.find_many(Tenant, Tenant.id.in_(tenant_ids))
        }
        counts = await self._guest_counts([wedding.id for wedding in weddings])
        return [
            {
                "id": wedding.id,
                "tenant_id": wedding.tenant_id,
                "subdomain": tenants[wedding.tenant_id].subdomain,
                "partner1_name": wedding.partner1_name,
                "partner2_name": wedding.partner2_name,
                "wedding_date": wedding.wedding_date,
                "is_published": wedding.is_published,
                "guest_count": counts.get(wedding.id, 0),
            }
            for wedding in weddings
        ]

    async def list_weddings(self, justification: str) -> list[dict]:
        audit = AuditContext(
            admin_user_id=self.admin.id,
            justification=justification,
            operation="list_weddings",
        )

        async def _list(client: TenantScopedClient) -> list[dict]:
            weddings = await client.find_many(Wedding, order_by=[Wedding.created_at.desc()])
            return await self._rows(weddings)

        return await with_admin_context(self.client, audit, _list)

    async def get_wedding(self, wedding_id: uuid.UUID, justification: str) -> dict:
        async def _get(client: TenantScopedClient) -> dict:
            wedding = await client.find_unique(Wedding, wedding_id)
            if wedding is None:
                raise NotFoundException(f"Wedding {wedding_id} not found")
            return (await self._rows([wedding]))[0]

        audit = AuditContext(
            admin_user_id=self.admin.id,
            justification=justification,
            operation="get_wedding",
        )
        return await with_admin_context(self.client, audit, _get)
