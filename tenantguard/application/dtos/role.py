"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RoleResult:
    """Role read-model."""

    id: str
    tenant_id: str
    name: str
    description: str | None
    is_default: bool


@dataclass(frozen=True)
class RoleWithPermissions:
    """Role plus the ids of the permissions it grants (via role_permission)."""

    role: RoleResult
    permission_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def id(self) -> str:
        return self.role.id

    @property
    def name(self) -> str:
        return self.role.name
