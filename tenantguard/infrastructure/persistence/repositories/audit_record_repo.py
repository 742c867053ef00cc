"""Audit record repository. Append-only: add and query, no update or delete."""

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.dtos import AuditEvent, AuditQuery, AuditRecordResult
from tenantguard.infrastructure.persistence.models.audit_record import AuditRecord
from tenantguard.shared.utils.datetime import ensure_utc, utc_now


def _orm_to_result(row: AuditRecord) -> AuditRecordResult:
    return AuditRecordResult(
        id=row.id,
        timestamp=ensure_utc(row.timestamp),
        actor_id=row.actor_id,
        tenant_id=row.tenant_id,
        subject=row.subject,
        feature_area=row.feature_area,
        outcome=row.outcome,
        metadata=dict(row.metadata_json or {}),
    )


class AuditRecordRepository:
    """Append-only audit repository. Metadata must already be redacted by the caller."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add(self, event: AuditEvent) -> AuditRecordResult:
        """Append one audit record; return the stored row."""
        row = AuditRecord(
            timestamp=ensure_utc(event.timestamp) or utc_now(),
            actor_id=event.actor_id,
            tenant_id=event.tenant_id,
            subject=event.subject,
            feature_area=event.feature_area,
            outcome=event.outcome.value,
            metadata_json=dict(event.metadata),
        )
        self.db.add(row)
        await self.db.flush()
        return _orm_to_result(row)

    async def query(self, query: AuditQuery) -> list[AuditRecordResult]:
        """List a tenant's records with optional filters, newest first."""
        conditions = [AuditRecord.tenant_id == query.tenant_id]
        if query.actor_id is not None:
            conditions.append(AuditRecord.actor_id == query.actor_id)
        if query.feature_area is not None:
            conditions.append(AuditRecord.feature_area == query.feature_area)
        if query.subject is not None:
            conditions.append(AuditRecord.subject == query.subject)
        if query.outcome is not None:
            conditions.append(AuditRecord.outcome == query.outcome.value)
        if query.since is not None:
            conditions.append(AuditRecord.timestamp >= query.since)
        if query.until is not None:
            conditions.append(AuditRecord.timestamp < query.until)

        stmt = (
            select(AuditRecord)
            .where(and_(*conditions))
            .order_by(AuditRecord.timestamp.desc(), AuditRecord.id.desc())
            .offset(query.skip)
            .limit(query.limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]
