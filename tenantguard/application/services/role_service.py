"""Role service: role CRUD, permission sets, and actor role assignments (tenant-scoped)."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tenantguard.application.dtos import AssignmentResult, RoleResult, RoleWithPermissions
from tenantguard.application.interfaces.repositories import (
    IAssignmentRepository,
    IPermissionRepository,
    IRolePermissionRepository,
    IRoleRepository,
)
from tenantguard.domain.exceptions import (
    DuplicateNameException,
    ProtectedRoleException,
    ResourceNotFoundException,
    RoleInUseException,
    ValidationException,
)
from tenantguard.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def _normalize_name(name: str) -> str:
    return " ".join(name.split()).casefold()


class RoleService:
    """Manage roles and assignments within one tenant per call.

    Default roles (is_default=True) have a fixed permission set and name;
    only their description may change, and they cannot be deleted.
    Uniqueness (role name, role-permission pair, assignment) is enforced by
    storage constraints; the pre-checks here only give clearer errors.
    """

    def __init__(
        self,
        role_repo: IRoleRepository,
        role_permission_repo: IRolePermissionRepository,
        assignment_repo: IAssignmentRepository,
        permission_repo: IPermissionRepository,
    ) -> None:
        self.role_repo = role_repo
        self.role_permission_repo = role_permission_repo
        self.assignment_repo = assignment_repo
        self.permission_repo = permission_repo

    async def _require_role(self, tenant_id: str, role_id: str) -> RoleResult:
        role = await self.role_repo.get_by_id_and_tenant(role_id, tenant_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def _validate_permission_ids(self, permission_ids: Iterable[str]) -> frozenset[str]:
        wanted = frozenset(permission_ids)
        if not wanted:
            return wanted
        found = {p.id for p in await self.permission_repo.get_by_ids(wanted)}
        missing = sorted(wanted - found)
        if missing:
            raise ValidationException(
                f"Unknown permission id(s): {', '.join(missing)}", field="permission_ids"
            )
        return wanted

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = " ".join(name.split())
        if not cleaned:
            raise ValidationException("Role name must not be blank", field="name")
        return cleaned

    async def get_role(self, tenant_id: str, role_id: str) -> RoleWithPermissions:
        role = await self._require_role(tenant_id, role_id)
        permission_ids = await self.role_permission_repo.get_permission_ids(role.id)
        return RoleWithPermissions(role=role, permission_ids=permission_ids)

    async def list_roles(
        self, tenant_id: str, skip: int = 0, limit: int = 100
    ) -> list[RoleResult]:
        return await self.role_repo.list_by_tenant(tenant_id, skip=skip, limit=limit)

    @traced("roles.create")
    async def create_role(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        permission_ids: Iterable[str] | None = None,
    ) -> RoleWithPermissions:
        """Create a custom role. Raises DuplicateNameException if the name is taken (case-insensitive)."""
        name = self._clean_name(name)
        wanted = await self._validate_permission_ids(permission_ids or ())
        if await self.role_repo.get_by_name(tenant_id, name) is not None:
            raise DuplicateNameException(name)
        role = await self.role_repo.create(tenant_id, name, description, is_default=False)
        if wanted:
            await self.role_permission_repo.replace_permissions(role.id, wanted)
        logger.info("Role created: tenant=%s role=%s name=%s", tenant_id, role.id, name)
        return RoleWithPermissions(role=role, permission_ids=wanted)

    @traced("roles.update")
    async def update_role(
        self,
        tenant_id: str,
        role_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        permission_ids: Iterable[str] | None = None,
    ) -> RoleWithPermissions:
        """Update name/description and optionally replace the permission set.

        Raises ProtectedRoleException when a default role's permission set or
        name would change. Resubmitting a default role's current permission set,
        or a case-only rename, is allowed.
        """
        role = await self._require_role(tenant_id, role_id)
        current = await self.role_permission_repo.get_permission_ids(role.id)
        wanted = (
            await self._validate_permission_ids(permission_ids)
            if permission_ids is not None
            else None
        )
        if name is not None:
            name = self._clean_name(name)

        if role.is_default:
            if wanted is not None and wanted != current:
                raise ProtectedRoleException(role.id, "permission set is fixed")
            if name is not None and _normalize_name(name) != _normalize_name(role.name):
                raise ProtectedRoleException(role.id, "name is fixed")

        if name is not None and _normalize_name(name) != _normalize_name(role.name):
            clash = await self.role_repo.get_by_name(tenant_id, name)
            if clash is not None and clash.id != role.id:
                raise DuplicateNameException(name)

        if name is not None or description is not None:
            role = await self.role_repo.update(
                tenant_id, role.id, name=name, description=description
            )
        if wanted is not None and wanted != current:
            await self.role_permission_repo.replace_permissions(role.id, wanted)
            current = wanted
        return RoleWithPermissions(role=role, permission_ids=current)

    @traced("roles.delete")
    async def delete_role(self, tenant_id: str, role_id: str) -> None:
        """Delete a role and its permission links.

        RoleInUseException if anyone holds it (checked first, and enforced
        again by the foreign key); ProtectedRoleException for default roles.
        """
        role = await self._require_role(tenant_id, role_id)
        holders = await self.assignment_repo.count_holders(tenant_id, role.id)
        if holders > 0:
            raise RoleInUseException(role.id, holders)
        if role.is_default:
            raise ProtectedRoleException(role.id, "default roles cannot be deleted")
        await self.role_repo.delete(tenant_id, role.id)
        logger.info("Role deleted: tenant=%s role=%s", tenant_id, role.id)

    @traced("roles.assign")
    async def assign_role(
        self,
        tenant_id: str,
        actor_id: str,
        role_id: str,
        granted_by: str | None = None,
    ) -> AssignmentResult:
        """Grant role to actor in tenant. Granting an already-held role is a no-op."""
        actor_id = actor_id.strip() if actor_id else ""
        if not actor_id:
            raise ValidationException("actor_id must not be blank", field="actor_id")
        role = await self._require_role(tenant_id, role_id)
        assignment, created = await self.assignment_repo.assign(
            tenant_id, actor_id, role.id, granted_by
        )
        if created:
            logger.info(
                "Role granted: tenant=%s actor=%s role=%s by=%s",
                tenant_id,
                actor_id,
                role.id,
                granted_by,
            )
        return assignment

    @traced("roles.revoke")
    async def revoke_role(self, tenant_id: str, actor_id: str, role_id: str) -> bool:
        """Remove the assignment. Returns False (no error) if the actor did not hold it."""
        removed = await self.assignment_repo.revoke(tenant_id, actor_id, role_id)
        if removed:
            logger.info(
                "Role revoked: tenant=%s actor=%s role=%s", tenant_id, actor_id, role_id
            )
        return removed

    async def list_actor_roles(
        self, tenant_id: str, actor_id: str
    ) -> list[RoleWithPermissions]:
        """Roles the actor holds in this tenant, each with its permission ids."""
        roles = await self.assignment_repo.list_roles_for_actor(tenant_id, actor_id)
        permissions = await self.role_permission_repo.get_permission_ids_for_roles(
            r.id for r in roles
        )
        return [
            RoleWithPermissions(role=r, permission_ids=permissions.get(r.id, frozenset()))
            for r in roles
        ]

    async def list_assignments(
        self, tenant_id: str, actor_id: str
    ) -> list[AssignmentResult]:
        return await self.assignment_repo.list_for_actor(tenant_id, actor_id)
