"""Tenant lifecycle: signup and public host resolution."""

import logging
import uuid

from sqlalchemy.exc import IntegrityError

from wedding_platform.config import settings
from wedding_platform.exceptions import ConflictException
from wedding_platform.models.enums import UserRole
from wedding_platform.models.tenant import Tenant
from wedding_platform.models.user import User
from wedding_platform.models.wedding import Wedding
from wedding_platform.modules.tenancy.client import TenantScopedClient
from wedding_platform.modules.tenancy.schemas import SignupRequest

logger = logging.getLogger(__name__)


class TenancyService:
    def __init__(self, client: TenantScopedClient) -> None:
        self.client = client

    async def signup(self, data: SignupRequest) -> tuple[Tenant, Wedding, User]:
        """Create the tenant, its wedding and the owning couple account together.

        All three rows are flushed in the request transaction; a failure on
        any of them rolls back the whole signup.
        """
        if await self.client.find_unique(Tenant, subdomain=data.subdomain) is not None:
            raise ConflictException(f"Subdomain '{data.subdomain}' is already taken")
        email = data.email.lower()
        if await self.client.find_unique(User, email=email) is not None:
            raise ConflictException("An account with this email already exists")

        couple_name = f"{data.partner1_name} & {data.partner2_name}"
        try:
            tenant = await self.client.create(Tenant, subdomain=data.subdomain, name=couple_name)
            wedding = await self.client.create(
                Wedding,
                tenant_id=tenant.id,
                partner1_name=data.partner1_name,
                partner2_name=data.partner2_name,
                wedding_date=data.wedding_date,
            )
            user = await self.client.create(
                User,
                email=email,
                name=couple_name,
                role=UserRole.COUPLE,
                tenant_id=tenant.id,
            )
        except IntegrityError as exc:
            logger.warning("Signup for subdomain %s lost a uniqueness race: %s", data.subdomain, exc)
            raise ConflictException("Subdomain or email is already taken") from exc

        logger.info("Created tenant %s (%s)", tenant.id, tenant.subdomain)
        return tenant, wedding, user

    async def get_tenant(self, tenant_id: uuid.UUID) -> Tenant | None:
        return await self.client.find_unique(Tenant, tenant_id)

    async def resolve_host(self, host: str) -> Tenant | None:
        """Map a request Host header to the tenant whose site it serves.

        ``<subdomain>.<root_domain>`` resolves by subdomain; any other host
        must be a custom domain that has been verified.
        """
        hostname = host.split(":", 1)[0].strip().lower().rstrip(".")
        if not hostname:
            return None

        suffix = f".{settings.root_domain.lower()}"
        if hostname.endswith(suffix):
            subdomain = hostname[: -len(suffix)]
            if not subdomain or "." in subdomain:
                return None
            return await self.client.find_unique(Tenant, subdomain=subdomain)

        tenant = await self.client.find_unique(Tenant, custom_domain=hostname)
        if tenant is None or tenant.custom_domain_verified_at is None:
            return None
        return tenant
