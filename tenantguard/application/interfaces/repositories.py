"""Repository interfaces (ports) for the application layer.

Every method on a tenant-owned store takes tenant_id explicitly. There is
no ambient tenant: a call site that forgets the tenant does not type-check.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeVar

from tenantguard.application.dtos import (
    AssignmentResult,
    AuditEvent,
    AuditQuery,
    AuditRecordResult,
    PermissionResult,
    RoleResult,
    TenantResult,
)


class IPermissionRepository(Protocol):
    """Read access to the global permission catalog."""

    async def list_all(self) -> list[PermissionResult]:
        """Return every catalog entry ordered by feature_area, action_type."""
        ...

    async def get_by_ids(self, permission_ids: Iterable[str]) -> list[PermissionResult]:
        """Return entries for the ids that exist; unknown ids are omitted."""
        ...

    async def get_by_pair(
        self, feature_area: str, action_type: str
    ) -> PermissionResult | None: ...


class IRoleRepository(Protocol):
    """Tenant-scoped role storage. Name uniqueness is enforced by a constraint."""

    async def get_by_id_and_tenant(
        self, role_id: str, tenant_id: str
    ) -> RoleResult | None: ...

    async def get_by_name(self, tenant_id: str, name: str) -> RoleResult | None:
        """Case-insensitive lookup by name within the tenant."""
        ...

    async def list_by_tenant(
        self, tenant_id: str, skip: int = 0, limit: int = 100
    ) -> list[RoleResult]: ...

    async def create(
        self,
        tenant_id: str,
        name: str,
        description: str | None,
        is_default: bool = False,
    ) -> RoleResult:
        """Insert a role; raise DuplicateNameException on name collision."""
        ...

    async def update(
        self,
        tenant_id: str,
        role_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> RoleResult:
        """Update name/description; raise ResourceNotFoundException or DuplicateNameException."""
        ...

    async def delete(self, tenant_id: str, role_id: str) -> None:
        """Delete the role (its role_permission rows cascade); raise RoleInUseException if held."""
        ...


class IRolePermissionRepository(Protocol):
    """Role to permission links."""

    async def get_permission_ids(self, role_id: str) -> frozenset[str]: ...

    async def get_permission_ids_for_roles(
        self, role_ids: Iterable[str]
    ) -> dict[str, frozenset[str]]:
        """Return {role_id: permission ids} in one query."""
        ...

    async def replace_permissions(
        self, role_id: str, permission_ids: Iterable[str]
    ) -> None:
        """Make the role's permission set exactly permission_ids."""
        ...


class IAssignmentRepository(Protocol):
    """Actor role assignments. Uniqueness on (actor, role, tenant) is a constraint."""

    async def get(
        self, tenant_id: str, actor_id: str, role_id: str
    ) -> AssignmentResult | None: ...

    async def assign(
        self,
        tenant_id: str,
        actor_id: str,
        role_id: str,
        granted_by: str | None,
    ) -> tuple[AssignmentResult, bool]:
        """Insert the assignment; return (assignment, created). Existing rows are returned as-is."""
        ...

    async def revoke(self, tenant_id: str, actor_id: str, role_id: str) -> bool:
        """Delete the assignment; return False if it did not exist."""
        ...

    async def list_for_actor(
        self, tenant_id: str, actor_id: str
    ) -> list[AssignmentResult]: ...

    async def list_roles_for_actor(
        self, tenant_id: str, actor_id: str
    ) -> list[RoleResult]:
        """Roles held by the actor in this tenant only."""
        ...

    async def count_holders(self, tenant_id: str, role_id: str) -> int: ...


class ITenantRepository(Protocol):
    async def get_by_id(self, tenant_id: str) -> TenantResult | None: ...

    async def get_by_code(self, code: str) -> TenantResult | None: ...

    async def create(self, code: str, name: str) -> TenantResult:
        """Insert a tenant; raise TenantAlreadyExistsException if code is taken."""
        ...


class IAuditRecordRepository(Protocol):
    """Append-only audit storage: add and query, nothing else."""

    async def add(self, event: AuditEvent) -> AuditRecordResult: ...

    async def query(self, query: AuditQuery) -> list[AuditRecordResult]:
        """Return matching records newest first."""
        ...


ResultT = TypeVar("ResultT")


class ITenantScopedStore(Protocol[ResultT]):
    """Generic scoped storage contract for tenant-owned entities.

    find/update/delete report ResourceNotFoundException both for missing rows
    and for rows owned by another tenant. create takes tenant_id from the
    caller's resolved context and ignores any tenant_id in the payload;
    update never changes tenant_id.
    """

    async def find(self, tenant_id: str, entity_id: str) -> ResultT: ...

    async def list(
        self,
        tenant_id: str,
        filters: Mapping[str, Any] | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ResultT]: ...

    async def create(self, tenant_id: str, payload: Mapping[str, Any]) -> ResultT: ...

    async def update(
        self, tenant_id: str, entity_id: str, patch: Mapping[str, Any]
    ) -> ResultT: ...

    async def delete(self, tenant_id: str, entity_id: str) -> None: ...
