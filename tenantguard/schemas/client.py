"""Client API schemas.

ClientCreate deliberately has no tenant_id: the tenant comes from the
authenticated context. Extra fields (including a smuggled tenant_id) are ignored.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClientCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    status: str = Field(default="active", max_length=32)
    notes: str | None = None


class ClientUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    status: str | None = Field(default=None, max_length=32)
    notes: str | None = None


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    email: str | None
    phone: str | None
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime
