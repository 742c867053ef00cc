"""Client ORM model: the reference tenant-owned business entity."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tenantguard.infrastructure.persistence.database import Base
from tenantguard.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TenantMixin,
    TimestampMixin,
)


class Client(CuidMixin, TenantMixin, TimestampMixin, Base):
    """Customer record owned by one tenant. Table: client."""

    __tablename__ = "client"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
