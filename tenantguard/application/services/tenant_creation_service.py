"""Tenant creation: tenant row, default roles, and the owner's Admin grant in one transaction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from tenantguard.application.dtos import RoleResult, TenantResult
from tenantguard.application.interfaces.repositories import ITenantRepository
from tenantguard.domain.exceptions import TenantAlreadyExistsException, ValidationException

logger = logging.getLogger(__name__)


class ITenantInitializer(Protocol):
    async def seed_default_roles(self, tenant_id: str) -> dict[str, RoleResult]: ...

    async def assign_owner_role(
        self, tenant_id: str, owner_actor_id: str, granted_by: str | None = None
    ) -> RoleResult: ...


@dataclass(frozen=True)
class TenantCreationResult:
    tenant: TenantResult
    default_roles: dict[str, RoleResult]
    owner_role: RoleResult


class TenantCreationService:
    """Creates a tenant and bootstraps its access control. Caller owns the transaction."""

    def __init__(
        self, tenant_repo: ITenantRepository, initializer: ITenantInitializer
    ) -> None:
        self.tenant_repo = tenant_repo
        self.initializer = initializer

    async def create_tenant(
        self, code: str, name: str, owner_actor_id: str
    ) -> TenantCreationResult:
        code = code.strip()
        owner_actor_id = owner_actor_id.strip()
        if not owner_actor_id:
            raise ValidationException("owner_actor_id must not be blank", field="owner_actor_id")
        if await self.tenant_repo.get_by_code(code) is not None:
            raise TenantAlreadyExistsException(code)
        tenant = await self.tenant_repo.create(code, name.strip())
        roles = await self.initializer.seed_default_roles(tenant.id)
        owner_role = await self.initializer.assign_owner_role(tenant.id, owner_actor_id)
        logger.info(
            "Tenant created: id=%s code=%s owner=%s roles=%d",
            tenant.id,
            code,
            owner_actor_id,
            len(roles),
        )
        return TenantCreationResult(tenant=tenant, default_roles=roles, owner_role=owner_role)
