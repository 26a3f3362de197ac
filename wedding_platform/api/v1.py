"""Centralized v1 API router: all module routers are included here."""

from fastapi import APIRouter

from wedding_platform.modules.admin.router import router as admin_router
from wedding_platform.modules.events.router import router as events_router
from wedding_platform.modules.guests.router import router as guests_router
from wedding_platform.modules.site.router import router as site_router
from wedding_platform.modules.tenancy.router import router as tenancy_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(tenancy_router)
v1_router.include_router(guests_router)
v1_router.include_router(events_router)
v1_router.include_router(site_router)
v1_router.include_router(admin_router)
