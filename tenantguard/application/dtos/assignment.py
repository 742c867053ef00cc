"""DTOs for actor-role assignments."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AssignmentResult:
    """One actor holding one role in one tenant."""

    id: str
    tenant_id: str
    actor_id: str
    role_id: str
    granted_by: str | None
    granted_at: datetime
