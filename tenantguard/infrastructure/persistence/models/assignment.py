"""ActorRoleAssignment ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tenantguard.infrastructure.persistence.database import Base
from tenantguard.infrastructure.persistence.models.mixins import CuidMixin, TenantMixin
from tenantguard.shared.utils.datetime import utc_now


class ActorRoleAssignment(CuidMixin, TenantMixin, Base):
    """Actor holds role within tenant. Table: actor_role_assignment.

    actor_id is opaque (actors come from an external identity system), so it
    is not a foreign key. role_id has no ON DELETE action: deleting a held
    role fails at the database, closing the race with a concurrent assign.
    Rows are inserted or deleted, never updated.
    """

    __tablename__ = "actor_role_assignment"

    actor_id: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[str] = mapped_column(String, ForeignKey("role.id"), nullable=False)
    granted_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    granted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "actor_id", "role_id", "tenant_id", name="uq_actor_role_assignment"
        ),
        Index("ix_actor_role_assignment_lookup", "tenant_id", "actor_id"),
        Index("ix_actor_role_assignment_role", "role_id"),
    )
