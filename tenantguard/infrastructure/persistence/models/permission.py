"""Permission catalog ORM model (global, not tenant-scoped)."""

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tenantguard.infrastructure.persistence.database import Base
from tenantguard.infrastructure.persistence.models.mixins import CuidMixin


class Permission(CuidMixin, Base):
    """One (feature_area, action_type) capability. Table: permission."""

    __tablename__ = "permission"

    feature_area: Mapped[str] = mapped_column(String(64), nullable=False)
    action_type: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "feature_area", "action_type", name="uq_permission_feature_action"
        ),
    )
