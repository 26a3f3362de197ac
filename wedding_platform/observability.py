"""Logging setup that tags every record with the request id and current tenant."""

from __future__ import annotations

import logging
from contextvars import ContextVar

from wedding_platform.modules.tenancy.context import get_current_tenant

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [request_id=%(request_id)s tenant=%(tenant_id)s] %(message)s"


class TenantContextFilter(logging.Filter):
    """Inject request context (request_id, tenant_id) into records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        tenant_id = get_current_tenant()
        record.tenant_id = str(tenant_id) if tenant_id is not None else "-"
        return True


def configure_logging(level: str = "info") -> None:
    """Install a root handler whose records carry the request context."""
    handler = logging.StreamHandler()
    handler.addFilter(TenantContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())
