"""DTOs for the audit trail: events to record, stored records, and queries."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tenantguard.shared.enums import AuditOutcome


@dataclass(frozen=True)
class AuditEvent:
    """Something to record. metadata is redacted by the emitter before it is written.

    subject is "feature_area:action_type" for authorization decisions and
    guarded operations, or "resource:operation" for data-access events.
    """

    subject: str
    outcome: AuditOutcome
    actor_id: str | None = None
    tenant_id: str | None = None
    feature_area: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime | None = None


@dataclass(frozen=True)
class AuditRecordResult:
    """Stored audit record."""

    id: str
    timestamp: datetime
    actor_id: str | None
    tenant_id: str | None
    subject: str
    feature_area: str | None
    outcome: str
    metadata: dict[str, Any]


@dataclass(frozen=True)
class AuditQuery:
    """Filters for the audit query surface. tenant_id is always required.

    feature_area matches the stored feature area; subject matches the full
    subject string (resource/operation). since is inclusive, until exclusive.
    """

    tenant_id: str
    actor_id: str | None = None
    feature_area: str | None = None
    subject: str | None = None
    outcome: AuditOutcome | None = None
    since: datetime | None = None
    until: datetime | None = None
    skip: int = 0
    limit: int = 100
