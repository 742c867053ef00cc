"""Role and RolePermission ORM models."""

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tenantguard.infrastructure.persistence.database import Base
from tenantguard.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TenantMixin,
    TimestampMixin,
)


def role_name_key(name: str) -> str:
    """Case-folded, whitespace-trimmed form used for per-tenant name uniqueness."""
    return " ".join(name.split()).casefold()


class Role(CuidMixin, TenantMixin, TimestampMixin, Base):
    """Tenant-owned bundle of permissions. Table: role.

    name_key mirrors name (case-folded) and carries the uniqueness constraint,
    so "Billing Clerk" and "billing clerk" collide within a tenant.
    """

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "name_key", name="uq_role_tenant_name"),
    )


class RolePermission(CuidMixin, Base):
    """Role to Permission link. Table: role_permission. Removed with its role."""

    __tablename__ = "role_permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False
    )
    permission_id: Mapped[str] = mapped_column(
        String, ForeignKey("permission.id", ondelete="RESTRICT"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
        Index("ix_role_permission_permission", "permission_id"),
    )
