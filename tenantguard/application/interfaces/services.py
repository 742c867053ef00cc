"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import Protocol

from tenantguard.application.dtos import AuditEvent, AuditRecordResult
from tenantguard.domain.authorization import GrantLookup


class IGrantResolver(Protocol):
    """Reads everything the decision needs in one round-trip to the store."""

    async def lookup(
        self,
        actor_id: str,
        tenant_id: str,
        feature_area: str,
        action_type: str,
    ) -> GrantLookup: ...


class IAuditSink(Protocol):
    """Durable destination for audit records. May raise; the emitter handles it."""

    async def write(self, event: AuditEvent) -> AuditRecordResult: ...


class IAuditEmitter(Protocol):
    """Records audit events without ever raising into the caller."""

    async def record(self, event: AuditEvent) -> AuditRecordResult | None: ...


class ITenantResolver(Protocol):
    """Resolves the tenant an authenticated actor is acting in.

    Collaborator contract: the authentication layer provides it; the
    authorization engine requires its output before any check runs.
    """

    async def resolve(self, actor_id: str, claimed_tenant_id: str | None) -> str | None:
        """Return the tenant id for this actor, or None if none can be resolved."""
        ...
