"""Role-permission link repository."""

import logging
from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.infrastructure.persistence.models.role import RolePermission
from tenantguard.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class RolePermissionRepository(BaseRepository[RolePermission]):
    """Links are identified by (role_id, permission_id); the pair is unique."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, RolePermission)

    async def get_permission_ids(self, role_id: str) -> frozenset[str]:
        result = await self.db.execute(
            select(RolePermission.permission_id).where(RolePermission.role_id == role_id)
        )
        return frozenset(result.scalars().all())

    async def get_permission_ids_for_roles(
        self, role_ids: Iterable[str]
    ) -> dict[str, frozenset[str]]:
        ids = list(set(role_ids))
        if not ids:
            return {}
        result = await self.db.execute(
            select(RolePermission.role_id, RolePermission.permission_id).where(
                RolePermission.role_id.in_(ids)
            )
        )
        grouped: dict[str, set[str]] = defaultdict(set)
        for role_id, permission_id in result.all():
            grouped[role_id].add(permission_id)
        return {role_id: frozenset(grouped.get(role_id, ())) for role_id in ids}

    async def replace_permissions(
        self, role_id: str, permission_ids: Iterable[str]
    ) -> None:
        """Diff against the current set: delete what is gone, insert what is new.

        A link inserted concurrently by another writer counts as already
        granted. IntegrityError propagates only when a wanted link is still
        missing afterwards (e.g. an unknown permission id).
        """
        wanted = set(permission_ids)
        current = await self.get_permission_ids(role_id)
        to_remove = current - wanted
        to_add = wanted - current
        if to_remove:
            await self.db.execute(
                delete(RolePermission).where(
                    RolePermission.role_id == role_id,
                    RolePermission.permission_id.in_(to_remove),
                )
            )
        if not to_add:
            return
        try:
            async with self.db.begin_nested():
                self.db.add_all(
                    RolePermission(role_id=role_id, permission_id=pid)
                    for pid in sorted(to_add)
                )
                await self.db.flush()
        except IntegrityError:
            linked = await self.get_permission_ids(role_id)
            logger.info(
                "Role %s permission links changed concurrently; inserting the remainder",
                role_id,
            )
            for pid in sorted(to_add - linked):
                await self._add_link(role_id, pid)

    async def _add_link(self, role_id: str, permission_id: str) -> None:
        try:
            await self._insert(RolePermission(role_id=role_id, permission_id=permission_id))
        except IntegrityError:
            if permission_id not in await self.get_permission_ids(role_id):
                raise
