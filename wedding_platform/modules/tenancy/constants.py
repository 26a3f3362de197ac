"""Tenancy module constants."""

# JWT claim names
CLAIM_TENANT_ID = "tenant_id"
CLAIM_ROLE = "role"
CLAIM_EMAIL = "email"

# Cache configuration
CACHE_PREFIX = "tenant"
CACHE_TTL_DEFAULT = 300  # seconds

# Routes that never run inside a tenant scope
EXCLUDED_ROUTES = [
    "/health",
    # Public sites bind the tenant resolved from the Host header instead
    "/api/v1/site",
    "/api/docs",
    "/api/openapi.json",
    "/api/redoc",
]

SUBDOMAIN_PATTERN = r"^[a-z0-9][a-z0-9\-]*$"
