"""Permission catalog repository (global rows, no tenant filter)."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.dtos import PermissionResult
from tenantguard.infrastructure.persistence.models.permission import Permission
from tenantguard.infrastructure.persistence.repositories.base import BaseRepository


def _permission_to_result(p: Permission) -> PermissionResult:
    return PermissionResult(
        id=p.id,
        feature_area=p.feature_area,
        action_type=p.action_type,
        description=p.description,
    )


class PermissionRepository(BaseRepository[Permission]):
    """Read access to the catalog plus the insert used by deployment-time seeding."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def list_all(self) -> list[PermissionResult]:
        result = await self.db.execute(
            select(Permission).order_by(Permission.feature_area, Permission.action_type)
        )
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def get_by_ids(self, permission_ids: Iterable[str]) -> list[PermissionResult]:
        ids = list(set(permission_ids))
        if not ids:
            return []
        result = await self.db.execute(select(Permission).where(Permission.id.in_(ids)))
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def get_by_pair(
        self, feature_area: str, action_type: str
    ) -> PermissionResult | None:
        result = await self.db.execute(
            select(Permission).where(
                Permission.feature_area == feature_area,
                Permission.action_type == action_type,
            )
        )
        permission = result.scalar_one_or_none()
        return _permission_to_result(permission) if permission else None

    async def existing_pairs(self) -> set[tuple[str, str]]:
        result = await self.db.execute(
            select(Permission.feature_area, Permission.action_type)
        )
        return {(row[0], row[1]) for row in result.all()}

    async def add(
        self, feature_area: str, action_type: str, description: str | None
    ) -> PermissionResult:
        """Insert one catalog entry. IntegrityError propagates if the pair exists."""
        permission = await self._insert(
            Permission(
                feature_area=feature_area,
                action_type=action_type,
                description=description,
            )
        )
        return _permission_to_result(permission)
