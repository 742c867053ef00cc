"""Durable audit sink: each record is written in its own short transaction.

The audit write never joins the caller's transaction: a denied or failed
request rolls back, and its audit record must still be committed.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantguard.application.dtos import AuditEvent, AuditRecordResult
from tenantguard.infrastructure.persistence.repositories.audit_record_repo import (
    AuditRecordRepository,
)


class SessionAuditSink:
    """Implements IAuditSink on a session factory (one session + commit per record)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def write(self, event: AuditEvent) -> AuditRecordResult:
        async with self._session_factory() as session:
            async with session.begin():
                return await AuditRecordRepository(session).add(event)
