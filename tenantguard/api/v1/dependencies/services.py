"""Service and repository factories for endpoints (composition root).

Reads use the request's plain session (get_db); writes use the
transactional session (get_db_transactional), which commits when the
handler returns and rolls back if it raises.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.services.audit_query_service import AuditQueryService
from tenantguard.application.services.permission_service import PermissionCatalogService
from tenantguard.application.services.role_service import RoleService
from tenantguard.application.services.tenant_creation_service import TenantCreationService
from tenantguard.infrastructure.persistence.database import get_db, get_db_transactional
from tenantguard.infrastructure.persistence.repositories import (
    AssignmentRepository,
    AuditRecordRepository,
    ClientRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    TenantRepository,
)
from tenantguard.infrastructure.services.tenant_initialization_service import (
    TenantInitializationService,
)


def _role_service(db: AsyncSession) -> RoleService:
    return RoleService(
        role_repo=RoleRepository(db),
        role_permission_repo=RolePermissionRepository(db),
        assignment_repo=AssignmentRepository(db),
        permission_repo=PermissionRepository(db),
    )


async def get_role_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RoleService:
    """Role service for read operations."""
    return _role_service(db)


async def get_role_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RoleService:
    """Role service for create/update/delete and assignment changes."""
    return _role_service(db)


async def get_permission_catalog_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PermissionCatalogService:
    return PermissionCatalogService(PermissionRepository(db))


async def get_audit_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuditQueryService:
    return AuditQueryService(AuditRecordRepository(db))


async def get_client_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientRepository:
    """Client repository for read operations."""
    return ClientRepository(db)


async def get_client_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ClientRepository:
    """Client repository for writes (transactional)."""
    return ClientRepository(db)


async def get_tenant_creation_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TenantCreationService:
    """Tenant row, default roles and owner grant share one transaction."""
    return TenantCreationService(TenantRepository(db), TenantInitializationService(db))
