"""Tenant repository."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.dtos import TenantResult
from tenantguard.domain.exceptions import TenantAlreadyExistsException
from tenantguard.infrastructure.persistence.models.tenant import Tenant
from tenantguard.infrastructure.persistence.repositories.base import BaseRepository


def _tenant_to_result(tenant: Tenant) -> TenantResult:
    return TenantResult(
        id=tenant.id, code=tenant.code, name=tenant.name, status=tenant.status
    )


class TenantRepository(BaseRepository[Tenant]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant)

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:  # type: ignore[override]
        tenant = await super().get_by_id(tenant_id)
        return _tenant_to_result(tenant) if tenant else None

    async def get_by_code(self, code: str) -> TenantResult | None:
        result = await self.db.execute(select(Tenant).where(Tenant.code == code))
        tenant = result.scalar_one_or_none()
        return _tenant_to_result(tenant) if tenant else None

    async def create(self, code: str, name: str) -> TenantResult:
        """Insert a tenant; raise TenantAlreadyExistsException if code is taken."""
        try:
            tenant = await self._insert(Tenant(code=code, name=name, status="active"))
        except IntegrityError:
            raise TenantAlreadyExistsException(code) from None
        return _tenant_to_result(tenant)
