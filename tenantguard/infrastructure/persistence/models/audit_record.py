"""AuditRecord ORM model. Append-only record of authorization decisions and guarded outcomes."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Connection, DateTime, Index, String, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from tenantguard.infrastructure.persistence.database import Base
from tenantguard.shared.utils.datetime import utc_now
from tenantguard.shared.utils.generators import generate_cuid


class AuditRecord(Base):
    """Audit entry: who, which tenant, what subject, what outcome. No update/delete.

    tenant_id is deliberately not a foreign key: denials are recorded for
    tenants that may not exist, and records outlive deleted tenants.
    """

    __tablename__ = "audit_record"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    actor_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tenant_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    feature_area: Mapped[str | None] = mapped_column(String(64), nullable=True)
    outcome: Mapped[str] = mapped_column(String(32), nullable=False)
    metadata_json: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict
    )

    __table_args__ = (
        Index("ix_audit_record_tenant_timestamp", "tenant_id", "timestamp"),
        Index("ix_audit_record_tenant_actor", "tenant_id", "actor_id"),
        Index("ix_audit_record_tenant_feature", "tenant_id", "feature_area"),
    )


@event.listens_for(AuditRecord, "before_update")
def _prevent_audit_record_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditRecord
) -> None:
    """Audit records are append-only; updates are forbidden."""
    raise ValueError("Audit records are immutable and cannot be updated.")


@event.listens_for(AuditRecord, "before_delete")
def _prevent_audit_record_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditRecord
) -> None:
    """Audit records are only removed by the retention purge, never through the ORM."""
    raise ValueError("Audit records cannot be deleted.")
