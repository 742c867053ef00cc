"""Permission catalog service (read-only at runtime)."""

from tenantguard.application.dtos import PermissionResult
from tenantguard.application.interfaces.repositories import IPermissionRepository


class PermissionCatalogService:
    """list_permissions(): the catalog. Changes go through deployment-time seeding only."""

    def __init__(self, permission_repo: IPermissionRepository) -> None:
        self.permission_repo = permission_repo

    async def list_permissions(self) -> list[PermissionResult]:
        """Every (feature_area, action_type) pair, ordered; pairs are unique by constraint."""
        return await self.permission_repo.list_all()

    async def get_permission(
        self, feature_area: str, action_type: str
    ) -> PermissionResult | None:
        return await self.permission_repo.get_by_pair(feature_area, action_type)
