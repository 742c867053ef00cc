"""Tenant bootstrap API schemas."""

from pydantic import BaseModel, Field


class TenantCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=64, pattern=r"^[a-z0-9][a-z0-9-]*$")
    name: str = Field(..., min_length=1, max_length=255)
    owner_actor_id: str = Field(..., min_length=1, max_length=255)


class TenantCreateResponse(BaseModel):
    tenant_id: str
    code: str
    name: str
    owner_role_id: str
    default_role_ids: dict[str, str]
