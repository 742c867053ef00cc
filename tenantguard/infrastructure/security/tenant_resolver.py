"""Tenant resolution for an authenticated actor."""

from sqlalchemy import distinct, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.core.tenant_validation import validate_tenant_id
from tenantguard.infrastructure.persistence.models.assignment import ActorRoleAssignment


class PrincipalTenantResolver:
    """Implements ITenantResolver.

    A claimed tenant (token claim or header) is used as-is once its format is
    valid; membership is not checked here because the authorization check
    that follows denies with NO_ROLES for a tenant the actor has no role in.
    Without a claim, the actor's tenant is inferred only when it holds roles
    in exactly one tenant.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def resolve(self, actor_id: str, claimed_tenant_id: str | None) -> str | None:
        if claimed_tenant_id:
            return validate_tenant_id(claimed_tenant_id)
        result = await self.db.execute(
            select(distinct(ActorRoleAssignment.tenant_id))
            .where(ActorRoleAssignment.actor_id == actor_id)
            .limit(2)
        )
        tenant_ids = list(result.scalars().all())
        return tenant_ids[0] if len(tenant_ids) == 1 else None
