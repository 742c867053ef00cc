"""Role repository. Every query is filtered by tenant_id."""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.dtos import RoleResult
from tenantguard.domain.exceptions import (
    DuplicateNameException,
    ResourceNotFoundException,
    RoleInUseException,
)
from tenantguard.infrastructure.persistence.models.role import Role, role_name_key
from tenantguard.infrastructure.persistence.repositories.base import BaseRepository


def role_to_result(role: Role) -> RoleResult:
    return RoleResult(
        id=role.id,
        tenant_id=role.tenant_id,
        name=role.name,
        description=role.description,
        is_default=role.is_default,
    )


class RoleRepository(BaseRepository[Role]):
    """Tenant-scoped role storage; returns RoleResult, never ORM rows."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def _get_row(self, role_id: str, tenant_id: str) -> Role | None:
        result = await self.db.execute(
            select(Role).where(Role.id == role_id, Role.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_tenant(
        self, role_id: str, tenant_id: str
    ) -> RoleResult | None:
        role = await self._get_row(role_id, tenant_id)
        return role_to_result(role) if role else None

    async def get_by_name(self, tenant_id: str, name: str) -> RoleResult | None:
        result = await self.db.execute(
            select(Role).where(
                Role.tenant_id == tenant_id, Role.name_key == role_name_key(name)
            )
        )
        role = result.scalar_one_or_none()
        return role_to_result(role) if role else None

    async def list_by_tenant(
        self, tenant_id: str, skip: int = 0, limit: int = 100
    ) -> list[RoleResult]:
        result = await self.db.execute(
            select(Role)
            .where(Role.tenant_id == tenant_id)
            .order_by(Role.is_default.desc(), Role.name)
            .offset(skip)
            .limit(limit)
        )
        return [role_to_result(r) for r in result.scalars().all()]

    async def create(
        self,
        tenant_id: str,
        name: str,
        description: str | None,
        is_default: bool = False,
    ) -> RoleResult:
        """Insert a role; a concurrent insert of the same name surfaces as DuplicateNameException."""
        role = Role(
            tenant_id=tenant_id,
            name=name,
            name_key=role_name_key(name),
            description=description,
            is_default=is_default,
        )
        try:
            await self._insert(role)
        except IntegrityError:
            raise DuplicateNameException(name) from None
        return role_to_result(role)

    async def update(
        self,
        tenant_id: str,
        role_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> RoleResult:
        role = await self._get_row(role_id, tenant_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        # Open the savepoint before touching the row: begin_nested() flushes
        # pending changes first, and a name collision must stay inside it.
        try:
            async with self.db.begin_nested():
                if name is not None:
                    role.name = name
                    role.name_key = role_name_key(name)
                if description is not None:
                    role.description = description
                await self.db.flush()
        except IntegrityError:
            raise DuplicateNameException(name or "") from None
        return role_to_result(role)

    async def delete(self, tenant_id: str, role_id: str) -> None:
        """Delete with a Core statement so the database applies CASCADE/NO ACTION itself."""
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(
                    delete(Role).where(Role.id == role_id, Role.tenant_id == tenant_id)
                )
        except IntegrityError:
            raise RoleInUseException(role_id) from None
        if result.rowcount == 0:
            raise ResourceNotFoundException("role", role_id)
