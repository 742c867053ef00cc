"""Frozen read-models returned by repositories and services (no ORM leakage)."""

from tenantguard.application.dtos.assignment import AssignmentResult
from tenantguard.application.dtos.audit import AuditEvent, AuditQuery, AuditRecordResult
from tenantguard.application.dtos.client import ClientResult
from tenantguard.application.dtos.permission import PermissionResult
from tenantguard.application.dtos.role import RoleResult, RoleWithPermissions
from tenantguard.application.dtos.tenant import TenantResult

__all__ = [
    "AssignmentResult",
    "AuditEvent",
    "AuditQuery",
    "AuditRecordResult",
    "ClientResult",
    "PermissionResult",
    "RoleResult",
    "RoleWithPermissions",
    "TenantResult",
]
