"""DB session and audit emitter dependencies (composition root)."""

from __future__ import annotations

from tenantguard.application.services.audit_emitter import AuditEmitter
from tenantguard.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    get_session_factory,
)
from tenantguard.infrastructure.services.audit_sink import SessionAuditSink

__all__ = ["get_audit_emitter", "get_db", "get_db_transactional"]


async def get_audit_emitter() -> AuditEmitter:
    """Audit emitter writing through its own short sessions, never the request's."""
    return AuditEmitter(SessionAuditSink(get_session_factory()))
