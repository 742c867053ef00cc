"""Client repository (tenant-scoped)."""

from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.dtos import ClientResult
from tenantguard.infrastructure.persistence.models.client import Client
from tenantguard.infrastructure.persistence.repositories.tenant_scoped_repo import (
    TenantScopedRepository,
)
from tenantguard.shared.utils.datetime import ensure_utc


class ClientRepository(TenantScopedRepository[Client, ClientResult]):
    resource_type = "client"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Client)

    def _to_result(self, obj: Client) -> ClientResult:
        return ClientResult(
            id=obj.id,
            tenant_id=obj.tenant_id,
            name=obj.name,
            email=obj.email,
            phone=obj.phone,
            status=obj.status,
            notes=obj.notes,
            created_at=ensure_utc(obj.created_at),
            updated_at=ensure_utc(obj.updated_at),
        )
