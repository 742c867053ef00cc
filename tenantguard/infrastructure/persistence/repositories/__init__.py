"""SQLAlchemy repositories implementing the application-layer ports."""

from tenantguard.infrastructure.persistence.repositories.assignment_repo import (
    AssignmentRepository,
)
from tenantguard.infrastructure.persistence.repositories.audit_record_repo import (
    AuditRecordRepository,
)
from tenantguard.infrastructure.persistence.repositories.client_repo import ClientRepository
from tenantguard.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from tenantguard.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from tenantguard.infrastructure.persistence.repositories.role_repo import RoleRepository
from tenantguard.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from tenantguard.infrastructure.persistence.repositories.tenant_scoped_repo import (
    TenantScopedRepository,
)

__all__ = [
    "AssignmentRepository",
    "AuditRecordRepository",
    "ClientRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "TenantRepository",
    "TenantScopedRepository",
]
