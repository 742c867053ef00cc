"""SQLAlchemy mixins for common model patterns.

Provides CuidMixin, TenantMixin and TimestampMixin. Every tenant-owned
model includes TenantMixin, which also makes tenant_id write-once: a
flush that changes it raises before any SQL is emitted.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, ForeignKey, String, event, inspect
from sqlalchemy.orm import Mapped, Mapper, declared_attr, mapped_column

from tenantguard.shared.utils.datetime import utc_now
from tenantguard.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TenantMixin:
    """Mixin for multi-tenant models. Provides tenant_id FK to tenant with CASCADE delete."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("tenant.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (timezone-aware UTC, set client-side)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            onupdate=utc_now,
            nullable=False,
        )


@event.listens_for(TenantMixin, "before_update", propagate=True)
def _prevent_tenant_reassignment(
    _mapper: Mapper[Any], _connection: Connection, target: Any
) -> None:
    """tenant_id is fixed at creation; moving a row between tenants is forbidden."""
    history = inspect(target).attrs.tenant_id.history
    if history.deleted and history.added and history.deleted[0] != history.added[0]:
        raise ValueError(
            f"{type(target).__name__}.tenant_id is immutable once created."
        )
