"""Actor role assignment API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RoleAssign(BaseModel):
    """Request body for granting a role to an actor."""

    role_id: str = Field(..., min_length=1)


class AssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    actor_id: str
    role_id: str
    granted_by: str | None
    granted_at: datetime
