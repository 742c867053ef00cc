"""DTOs for the client entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ClientResult:
    id: str
    tenant_id: str
    name: str
    email: str | None
    phone: str | None
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime
