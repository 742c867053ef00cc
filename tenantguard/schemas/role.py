"""Role API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tenantguard.application.dtos import RoleResult, RoleWithPermissions


class RoleCreate(BaseModel):
    """Request body for creating a custom role."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    permission_ids: list[str] = Field(default_factory=list, max_length=500)


class RoleUpdate(BaseModel):
    """Request body for updating a role (partial). permission_ids replaces the set when present."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    permission_ids: list[str] | None = Field(default=None, max_length=500)


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: str | None
    is_default: bool

    @classmethod
    def from_result(cls, role: RoleResult) -> "RoleResponse":
        return cls.model_validate(role)


class RoleDetailResponse(RoleResponse):
    """Role with the ids of the permissions it grants."""

    permission_ids: list[str]

    @classmethod
    def from_role(cls, role: RoleWithPermissions) -> "RoleDetailResponse":
        return cls(
            id=role.role.id,
            tenant_id=role.role.tenant_id,
            name=role.role.name,
            description=role.role.description,
            is_default=role.role.is_default,
            permission_ids=sorted(role.permission_ids),
        )
