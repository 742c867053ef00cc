"""Infrastructure services: grant lookup, audit sink, catalog seeding, tenant init, retention."""

from tenantguard.infrastructure.services.audit_retention import purge_expired_audit_records
from tenantguard.infrastructure.services.audit_sink import SessionAuditSink
from tenantguard.infrastructure.services.grant_resolver import GrantResolver
from tenantguard.infrastructure.services.permission_catalog import (
    PERMISSION_SEEDS,
    seed_missing_permissions,
    validate_permission_seeds,
)
from tenantguard.infrastructure.services.tenant_initialization_service import (
    DEFAULT_ROLES,
    TenantInitializationService,
)

__all__ = [
    "DEFAULT_ROLES",
    "GrantResolver",
    "PERMISSION_SEEDS",
    "SessionAuditSink",
    "TenantInitializationService",
    "purge_expired_audit_records",
    "seed_missing_permissions",
    "validate_permission_seeds",
]
