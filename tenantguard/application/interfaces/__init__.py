"""Ports (Protocols) implemented by infrastructure and consumed by services."""

from tenantguard.application.interfaces.repositories import (
    IAssignmentRepository,
    IAuditRecordRepository,
    IPermissionRepository,
    IRolePermissionRepository,
    IRoleRepository,
    ITenantRepository,
    ITenantScopedStore,
)
from tenantguard.application.interfaces.services import (
    IAuditEmitter,
    IAuditSink,
    IGrantResolver,
    ITenantResolver,
)

__all__ = [
    "IAssignmentRepository",
    "IAuditEmitter",
    "IAuditRecordRepository",
    "IAuditSink",
    "IGrantResolver",
    "IPermissionRepository",
    "IRolePermissionRepository",
    "IRoleRepository",
    "ITenantRepository",
    "ITenantResolver",
    "ITenantScopedStore",
]
