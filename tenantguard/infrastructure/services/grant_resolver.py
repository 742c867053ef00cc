"""Grant resolver: everything an authorization decision needs, in one SQL statement."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.domain.authorization import GrantLookup
from tenantguard.infrastructure.persistence.models.assignment import ActorRoleAssignment
from tenantguard.infrastructure.persistence.models.permission import Permission
from tenantguard.infrastructure.persistence.models.role import Role, RolePermission


class GrantResolver:
    """Implements IGrantResolver with one SELECT of three scalar subqueries.

    Being a single statement, the three facts come from one snapshot. Every
    join is pinned to tenant_id on both the assignment and the role, so an
    assignment in another tenant can never count.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def lookup(
        self,
        actor_id: str,
        tenant_id: str,
        feature_area: str,
        action_type: str,
    ) -> GrantLookup:
        role_count = (
            select(func.count(ActorRoleAssignment.id))
            .select_from(ActorRoleAssignment)
            .join(Role, Role.id == ActorRoleAssignment.role_id)
            .where(
                ActorRoleAssignment.actor_id == actor_id,
                ActorRoleAssignment.tenant_id == tenant_id,
                Role.tenant_id == tenant_id,
            )
            .scalar_subquery()
        )
        permission_exists = (
            select(Permission.id)
            .where(
                Permission.feature_area == feature_area,
                Permission.action_type == action_type,
            )
            .exists()
        )
        granted = (
            select(RolePermission.id)
            .select_from(ActorRoleAssignment)
            .join(Role, Role.id == ActorRoleAssignment.role_id)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(
                ActorRoleAssignment.actor_id == actor_id,
                ActorRoleAssignment.tenant_id == tenant_id,
                Role.tenant_id == tenant_id,
                Permission.feature_area == feature_area,
                Permission.action_type == action_type,
            )
            .exists()
        )
        stmt = select(
            role_count.label("role_count"),
            permission_exists.label("permission_exists"),
            granted.label("granted"),
        )
        row = (await self.db.execute(stmt)).one()
        return GrantLookup(
            role_count=int(row.role_count or 0),
            permission_exists=bool(row.permission_exists),
            granted=bool(row.granted),
        )
