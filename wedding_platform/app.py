"""FastAPI application factory for the wedding platform API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from wedding_platform.config import settings
from wedding_platform.database.engine import engine
from wedding_platform.database.tenant import audit_tenant_coverage, tenant_owned_models
from wedding_platform.exceptions import AppException, MissingTenantContext
from wedding_platform.observability import configure_logging

logger = logging.getLogger(__name__)

# Rate limiter: keyed by client IP address
limiter = Limiter(key_func=get_remote_address, default_limits=["60/minute"])


def check_tenant_coverage() -> None:
    """Refuse to start when a model references tenant data without declaring ownership."""
    import wedding_platform.models  # noqa: F401  (populate the registry)

    uncovered = audit_tenant_coverage()
    if uncovered:
        raise RuntimeError(
            "Models reference tenant-owned tables without declaring tenant ownership: "
            + ", ".join(uncovered)
        )
    logger.info(
        "Tenant scoping active for: %s",
        ", ".join(model.__name__ for model in tenant_owned_models()),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle: verify tenant coverage, dispose engine on shutdown."""
    configure_logging(settings.log_level)
    check_tenant_coverage()
    yield
    await engine.dispose()


def _get_request_id(request: Request) -> str:
    """Retrieve the request ID stored by RequestIdMiddleware."""
    return getattr(request.state, "request_id", "unknown")


def _error_response(status_code: int, code: str, message: str, request_id: str, details: list | None = None) -> JSONResponse:
    """Build a structured error JSONResponse."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or [],
                "requestId": request_id,
            }
        },
    )


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Wedding Platform API",
        description="Multi-tenant wedding websites: guests, events, RSVPs and public sites.",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Rate limiter
    application.state.limiter = limiter

    # --- Middleware (last added = outermost in Starlette) ---

    # Tenant context middleware: binds the authenticated couple's tenant for the request
    from wedding_platform.modules.tenancy.middleware import TenantContextMiddleware

    application.add_middleware(TenantContextMiddleware)

    # CORS: configured via CORS_ORIGINS env var, never wildcard with credentials
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID: registered last so it runs first (outermost)
    from wedding_platform.middleware.request_id import RequestIdMiddleware

    application.add_middleware(RequestIdMiddleware)

    # --- Routers ---
    from wedding_platform.api.v1 import v1_router

    application.include_router(v1_router)

    # --- Exception Handlers ---

    @application.exception_handler(MissingTenantContext)
    async def missing_tenant_handler(request: Request, exc: MissingTenantContext) -> JSONResponse:
        # Programming defect: log the detail, answer like any other internal error
        logger.error("Tenant-scoped code ran without a tenant scope: %s %s", request.method, request.url.path)
        return _error_response(
            status_code=500,
            code="INTERNAL_ERROR",
            message="An unexpected error occurred.",
            request_id=_get_request_id(request),
        )

    @application.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return _error_response(
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            request_id=_get_request_id(request),
            details=exc.details,
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {"field": ".".join(str(loc) for loc in err.get("loc", [])), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _error_response(
            status_code=422,
            code="VALIDATION_ERROR",
            message="Validation failed",
            request_id=_get_request_id(request),
            details=details,
        )

    @application.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        return _error_response(
            status_code=429,
            code="RATE_LIMITED",
            message=str(exc.detail),
            request_id=_get_request_id(request),
        )

    @application.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return _error_response(
            status_code=500,
            code="INTERNAL_ERROR",
            message="An unexpected error occurred.",
            request_id=_get_request_id(request),
        )

    # Health check
    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok"}

    return application


app = create_app()
