"""Tenant RBAC initialization: default roles and the owner's Admin grant."""

from __future__ import annotations

from typing import TypedDict

from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.dtos import PermissionResult, RoleResult
from tenantguard.domain.exceptions import ResourceNotFoundException
from tenantguard.infrastructure.persistence.repositories import (
    AssignmentRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
)


class RoleData(TypedDict):
    """Default role definition.

    permissions are patterns: "area:action", "area:*", "*:action" or "*:*".
    exclude_feature_areas are removed after expansion.
    """

    description: str
    permissions: list[str]
    exclude_feature_areas: list[str]


ADMIN_ROLE_NAME = "Admin"

# Role and user management stays with Admin.
_ACCESS_CONTROL_AREAS = ["users", "roles"]

DEFAULT_ROLES: dict[str, RoleData] = {
    ADMIN_ROLE_NAME: {
        "description": "Full access to every feature area",
        "permissions": ["*:*"],
        "exclude_feature_areas": [],
    },
    "Manager": {
        "description": "Full access except user and role management",
        "permissions": ["*:*"],
        "exclude_feature_areas": _ACCESS_CONTROL_AREAS,
    },
    "Team Member": {
        "description": "View, create and edit operational records; no delete or export",
        "permissions": ["*:view", "*:create", "*:edit"],
        "exclude_feature_areas": [*_ACCESS_CONTROL_AREAS, "settings", "organizations"],
    },
    "Viewer": {
        "description": "Read-only access to operational records",
        "permissions": ["*:view"],
        "exclude_feature_areas": _ACCESS_CONTROL_AREAS,
    },
}


class TenantInitializationService:
    """Seeds a new tenant's default roles (is_default=True) and grants Admin to its owner.

    Runs inside the caller's transaction. The permission catalog must already
    be seeded; patterns that match nothing are skipped.
    """

    def __init__(
        self,
        db: AsyncSession,
        default_roles: dict[str, RoleData] | None = None,
    ) -> None:
        self.db = db
        self.default_roles = DEFAULT_ROLES if default_roles is None else default_roles
        self.role_repo = RoleRepository(db)
        self.role_permission_repo = RolePermissionRepository(db)
        self.permission_repo = PermissionRepository(db)
        self.assignment_repo = AssignmentRepository(db)

    async def seed_default_roles(self, tenant_id: str) -> dict[str, RoleResult]:
        """Create every default role not yet present in the tenant. Returns name -> role."""
        catalog = await self.permission_repo.list_all()
        seeded: dict[str, RoleResult] = {}
        for name, data in self.default_roles.items():
            role = await self.role_repo.get_by_name(tenant_id, name)
            if role is None:
                role = await self.role_repo.create(
                    tenant_id, name, data["description"], is_default=True
                )
                await self.role_permission_repo.replace_permissions(
                    role.id, self._resolve_role_permissions(data, catalog)
                )
            seeded[name] = role
        return seeded

    async def assign_owner_role(
        self, tenant_id: str, owner_actor_id: str, granted_by: str | None = None
    ) -> RoleResult:
        """Grant Admin to the tenant owner (idempotent)."""
        admin = await self.role_repo.get_by_name(tenant_id, ADMIN_ROLE_NAME)
        if admin is None:
            raise ResourceNotFoundException("role", f"{ADMIN_ROLE_NAME}:{tenant_id}")
        await self.assignment_repo.assign(
            tenant_id, owner_actor_id, admin.id, granted_by or owner_actor_id
        )
        return admin

    @classmethod
    def _resolve_role_permissions(
        cls, data: RoleData, catalog: list[PermissionResult]
    ) -> set[str]:
        excluded = set(data["exclude_feature_areas"])
        ids: set[str] = set()
        for pattern in data["permissions"]:
            for permission in catalog:
                if permission.feature_area in excluded:
                    continue
                if cls._matches(pattern, permission):
                    ids.add(permission.id)
        return ids

    @staticmethod
    def _matches(pattern: str, permission: PermissionResult) -> bool:
        area, _, action = pattern.partition(":")
        return (area in ("*", permission.feature_area)) and (
            action in ("*", permission.action_type)
        )
