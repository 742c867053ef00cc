"""ORM models. Importing this package registers every table on Base.metadata."""

from tenantguard.infrastructure.persistence.models.assignment import ActorRoleAssignment
from tenantguard.infrastructure.persistence.models.audit_record import AuditRecord
from tenantguard.infrastructure.persistence.models.client import Client
from tenantguard.infrastructure.persistence.models.permission import Permission
from tenantguard.infrastructure.persistence.models.role import Role, RolePermission
from tenantguard.infrastructure.persistence.models.tenant import Tenant

__all__ = [
    "ActorRoleAssignment",
    "AuditRecord",
    "Client",
    "Permission",
    "Role",
    "RolePermission",
    "Tenant",
]
