"""Actor role assignment repository."""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.dtos import AssignmentResult, RoleResult
from tenantguard.infrastructure.persistence.models.assignment import ActorRoleAssignment
from tenantguard.infrastructure.persistence.models.role import Role
from tenantguard.infrastructure.persistence.repositories.base import BaseRepository
from tenantguard.infrastructure.persistence.repositories.role_repo import role_to_result
from tenantguard.shared.utils.datetime import ensure_utc


def _assignment_to_result(a: ActorRoleAssignment) -> AssignmentResult:
    return AssignmentResult(
        id=a.id,
        tenant_id=a.tenant_id,
        actor_id=a.actor_id,
        role_id=a.role_id,
        granted_by=a.granted_by,
        granted_at=ensure_utc(a.granted_at),
    )


class AssignmentRepository(BaseRepository[ActorRoleAssignment]):
    """Assignments are inserted or deleted, never updated in place."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ActorRoleAssignment)

    async def _get_row(
        self, tenant_id: str, actor_id: str, role_id: str
    ) -> ActorRoleAssignment | None:
        result = await self.db.execute(
            select(ActorRoleAssignment).where(
                ActorRoleAssignment.tenant_id == tenant_id,
                ActorRoleAssignment.actor_id == actor_id,
                ActorRoleAssignment.role_id == role_id,
            )
        )
        return result.scalar_one_or_none()

    async def get(
        self, tenant_id: str, actor_id: str, role_id: str
    ) -> AssignmentResult | None:
        row = await self._get_row(tenant_id, actor_id, role_id)
        return _assignment_to_result(row) if row else None

    async def assign(
        self,
        tenant_id: str,
        actor_id: str,
        role_id: str,
        granted_by: str | None,
    ) -> tuple[AssignmentResult, bool]:
        """Insert, or return the existing row when the unique constraint says it is already held."""
        existing = await self._get_row(tenant_id, actor_id, role_id)
        if existing is not None:
            return _assignment_to_result(existing), False
        row = ActorRoleAssignment(
            tenant_id=tenant_id,
            actor_id=actor_id,
            role_id=role_id,
            granted_by=granted_by,
        )
        try:
            await self._insert(row)
        except IntegrityError:
            # Lost a race with a concurrent identical grant.
            winner = await self._get_row(tenant_id, actor_id, role_id)
            if winner is None:
                raise
            return _assignment_to_result(winner), False
        return _assignment_to_result(row), True

    async def revoke(self, tenant_id: str, actor_id: str, role_id: str) -> bool:
        result = await self.db.execute(
            delete(ActorRoleAssignment).where(
                ActorRoleAssignment.tenant_id == tenant_id,
                ActorRoleAssignment.actor_id == actor_id,
                ActorRoleAssignment.role_id == role_id,
            )
        )
        return result.rowcount > 0

    async def list_for_actor(
        self, tenant_id: str, actor_id: str
    ) -> list[AssignmentResult]:
        result = await self.db.execute(
            select(ActorRoleAssignment)
            .where(
                ActorRoleAssignment.tenant_id == tenant_id,
                ActorRoleAssignment.actor_id == actor_id,
            )
            .order_by(ActorRoleAssignment.granted_at)
        )
        return [_assignment_to_result(a) for a in result.scalars().all()]

    async def list_roles_for_actor(
        self, tenant_id: str, actor_id: str
    ) -> list[RoleResult]:
        """Join through assignment; both sides are pinned to tenant_id."""
        result = await self.db.execute(
            select(Role)
            .join(ActorRoleAssignment, ActorRoleAssignment.role_id == Role.id)
            .where(
                ActorRoleAssignment.tenant_id == tenant_id,
                ActorRoleAssignment.actor_id == actor_id,
                Role.tenant_id == tenant_id,
            )
            .order_by(Role.name)
        )
        return [role_to_result(r) for r in result.scalars().all()]

    async def count_holders(self, tenant_id: str, role_id: str) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(ActorRoleAssignment)
            .where(
                ActorRoleAssignment.tenant_id == tenant_id,
                ActorRoleAssignment.role_id == role_id,
            )
        )
        return int(result.scalar_one())
