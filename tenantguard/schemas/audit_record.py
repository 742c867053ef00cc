"""Audit record API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AuditRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    timestamp: datetime
    actor_id: str | None
    tenant_id: str | None
    subject: str
    feature_area: str | None
    outcome: str
    metadata: dict[str, Any]
