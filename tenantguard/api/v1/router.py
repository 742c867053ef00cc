"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from tenantguard.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from tenantguard.api.v1.endpoints import (
    actor_roles,
    audit_records,
    clients,
    health,
    permissions,
    roles,
    tenants,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(actor_roles.router, prefix="/actors", tags=["actor-roles"])
api_router.include_router(
    audit_records.router, prefix="/audit-records", tags=["audit-records"]
)
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
