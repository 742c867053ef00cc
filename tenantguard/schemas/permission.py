"""Permission catalog API schemas."""

from pydantic import BaseModel, ConfigDict


class PermissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    feature_area: str
    action_type: str
    description: str | None
