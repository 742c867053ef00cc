"""Application services."""

from tenantguard.application.services.audit_emitter import AuditEmitter
from tenantguard.application.services.audit_query_service import AuditQueryService
from tenantguard.application.services.authorization_service import (
    AuthorizationContext,
    AuthorizationService,
)
from tenantguard.application.services.permission_service import PermissionCatalogService
from tenantguard.application.services.role_service import RoleService
from tenantguard.application.services.tenant_creation_service import (
    TenantCreationResult,
    TenantCreationService,
)

__all__ = [
    "AuditEmitter",
    "AuditQueryService",
    "AuthorizationContext",
    "AuthorizationService",
    "PermissionCatalogService",
    "RoleService",
    "TenantCreationResult",
    "TenantCreationService",
]
