# Import all models so SQLAlchemy metadata is populated for Alembic and the tenant registry
from wedding_platform.models.audit import AdminAuditLog
from wedding_platform.models.enums import PhotoStatus, RsvpStatus, UserRole
from wedding_platform.models.event import Event
from wedding_platform.models.event_invitation import EventInvitation
from wedding_platform.models.guest import Guest
from wedding_platform.models.photo import Photo
from wedding_platform.models.tenant import Tenant
from wedding_platform.models.user import User
from wedding_platform.models.wedding import Wedding

__all__ = [
    "AdminAuditLog",
    "Event",
    "EventInvitation",
    "Guest",
    "Photo",
    "PhotoStatus",
    "RsvpStatus",
    "Tenant",
    "User",
    "UserRole",
    "Wedding",
]
