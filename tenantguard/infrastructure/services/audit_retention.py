"""Audit retention purge: privileged maintenance, never called from request handling.

Run via scripts/purge_audit_records.py (e.g. from cron). Deletes records
older than the retention window with one Core DELETE; the ORM listeners that
forbid deletes do not apply to Core statements. On Postgres the immutability
trigger only lets the DELETE through when tenantguard.audit_purge is set for
the transaction, which this function does with SET LOCAL.
"""

import logging

from sqlalchemy import delete, text
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.infrastructure.persistence.models.audit_record import AuditRecord
from tenantguard.shared.telemetry.tracing import traced
from tenantguard.shared.utils.datetime import days_ago

logger = logging.getLogger(__name__)


@traced("audit.retention_purge")
async def purge_expired_audit_records(db: AsyncSession, retention_days: int) -> int:
    """Delete audit records older than retention_days. Returns rows deleted.

    Caller owns the transaction (commit after return).
    """
    if retention_days < 1:
        raise ValueError("retention_days must be at least 1")
    cutoff = days_ago(retention_days)
    if db.get_bind().dialect.name == "postgresql":
        await db.execute(text("SET LOCAL tenantguard.audit_purge = 'on'"))
    result = await db.execute(
        delete(AuditRecord)
        .where(AuditRecord.timestamp < cutoff)
        .execution_options(synchronize_session=False)
    )
    deleted = result.rowcount or 0
    logger.info(
        "Audit retention purge: deleted %d record(s) older than %s (retention_days=%d)",
        deleted,
        cutoff.isoformat(),
        retention_days,
    )
    return deleted
