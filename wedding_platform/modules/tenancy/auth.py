"""JWT authentication for FastAPI.

Validates Bearer tokens from the Authorization header and extracts the user
claims. Couples carry the tenant they belong to; admins carry none.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from wedding_platform.config import settings
from wedding_platform.exceptions import UnauthorizedException
from wedding_platform.models.enums import UserRole
from wedding_platform.modules.tenancy.constants import CLAIM_EMAIL, CLAIM_ROLE, CLAIM_TENANT_ID

logger = logging.getLogger(__name__)

# FastAPI security scheme: extracts Bearer token from Authorization header
_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    """Represents the authenticated user extracted from a JWT token."""

    id: uuid.UUID
    email: str
    role: UserRole
    tenant_id: uuid.UUID | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    role: UserRole,
    tenant_id: uuid.UUID | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """Issue a signed access token for a user."""
    expires_at = datetime.now(timezone.utc) + (
        expires_in or timedelta(minutes=settings.jwt_expiry_minutes)
    )
    claims = {
        "sub": str(user_id),
        CLAIM_EMAIL: email,
        CLAIM_ROLE: role.value,
        "exp": expires_at,
    }
    if tenant_id is not None:
        claims[CLAIM_TENANT_ID] = str(tenant_id)
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def _decode_token(token: str) -> dict:
    """Decode and validate a JWT token. Raises UnauthorizedException on failure."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        return payload
    except JWTError as exc:
        logger.warning("JWT validation failed: %s", exc)
        raise UnauthorizedException("Invalid or expired token") from exc


def authenticate_token(token: str) -> AuthenticatedUser:
    """Build the AuthenticatedUser for a bearer token.

    A couple token must name its tenant; an admin token must not.
    """
    payload = _decode_token(token)
    try:
        role = UserRole(payload.get(CLAIM_ROLE, UserRole.COUPLE.value))
        raw_tenant = payload.get(CLAIM_TENANT_ID)
        user = AuthenticatedUser(
            id=uuid.UUID(payload["sub"]),
            email=payload[CLAIM_EMAIL],
            role=role,
            tenant_id=uuid.UUID(raw_tenant) if raw_tenant else None,
        )
    except (KeyError, ValueError) as exc:
        raise UnauthorizedException("Token is missing required claims") from exc

    if user.is_admin and user.tenant_id is not None:
        raise UnauthorizedException("Admin tokens cannot be bound to a tenant")
    return user


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> AuthenticatedUser:
    """FastAPI dependency that returns the current user.

    Reuses the user TenantContextMiddleware already authenticated for this
    request, so the route and the tenant scope always agree on who is calling.
    """
    user = getattr(request.state, "user", None)
    if user is not None:
        return user
    if credentials is None:
        raise UnauthorizedException("Authentication required")

    user = authenticate_token(credentials.credentials)
    request.state.user = user
    return user
