"""FastAPI middleware that runs each authenticated request inside its tenant scope."""

import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from wedding_platform.exceptions import UnauthorizedException
from wedding_platform.modules.tenancy.auth import authenticate_token
from wedding_platform.modules.tenancy.constants import EXCLUDED_ROUTES
from wedding_platform.modules.tenancy.context import run_with_tenant

logger = logging.getLogger(__name__)


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Authenticates the bearer token and binds the caller's tenant for the request.

    The tenant id comes only from the verified token; nothing the client sends
    in headers, paths or bodies can select a tenant. Couples run the rest of
    the request inside ``run_with_tenant``, so every TenantScopedClient call
    made by the handler is scoped to them. Admins and anonymous callers run
    unscoped; route dependencies decide whether that is allowed (401/403).
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path

        # Skip tenant extraction for excluded routes
        if any(path.startswith(route) for route in EXCLUDED_ROUTES):
            return await call_next(request)

        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not token:
            return await call_next(request)

        try:
            user = authenticate_token(token.strip())
        except UnauthorizedException:
            # Let the route dependency reject the request with a proper 401
            return await call_next(request)

        request.state.user = user
        if user.is_admin or user.tenant_id is None:
            return await call_next(request)

        return await run_with_tenant(user.tenant_id, call_next, request)
