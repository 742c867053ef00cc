"""Generic tenant-scoped repository: find/list/create/update/delete pinned to a tenant.

Rules every method follows:
- every statement carries `tenant_id == :tenant_id`;
- a row owned by another tenant is reported exactly like a missing row
  (ResourceNotFoundException), never as forbidden;
- create takes tenant_id from the caller's resolved context and discards
  any tenant_id in the payload;
- update never touches tenant_id or id, whatever the patch says.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.domain.exceptions import ResourceNotFoundException, ValidationException
from tenantguard.infrastructure.persistence.database import Base
from tenantguard.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Never settable from a create payload or an update patch.
PROTECTED_FIELDS = frozenset({"id", "tenant_id", "created_at", "updated_at"})


ModelType = TypeVar("ModelType", bound=Base)
ResultT = TypeVar("ResultT")


class TenantScopedRepository(BaseRepository[ModelType], Generic[ModelType, ResultT]):
    """Tenant-scoped CRUD over a model that includes TenantMixin.

    Subclasses set resource_type (used in NotFound) and implement _to_result.
    """

    resource_type: str = "resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        super().__init__(db, model)
        self._columns = frozenset(c.key for c in sa_inspect(model).column_attrs)

    def _to_result(self, obj: ModelType) -> ResultT:
        raise NotImplementedError

    def _writable(self, data: Mapping[str, Any], operation: str) -> dict[str, Any]:
        """Keep known, non-protected columns; note anything dropped."""
        dropped = set(data) & PROTECTED_FIELDS
        if dropped:
            logger.warning(
                "Ignoring protected fields on %s %s: %s",
                self.resource_type,
                operation,
                sorted(dropped),
            )
        unknown = set(data) - self._columns - PROTECTED_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown field(s) for {self.resource_type}: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        return {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}

    async def _resolve(self, tenant_id: str, entity_id: str) -> ModelType:
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == entity_id, model.tenant_id == tenant_id)
        )
        obj = result.scalar_one_or_none()
        if obj is None:
            raise ResourceNotFoundException(self.resource_type, entity_id)
        return obj

    async def find(self, tenant_id: str, entity_id: str) -> ResultT:
        return self._to_result(await self._resolve(tenant_id, entity_id))

    async def list(
        self,
        tenant_id: str,
        filters: Mapping[str, Any] | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ResultT]:
        """Equality filters on known columns; a tenant_id filter cannot widen the scope."""
        model: Any = self.model
        stmt = select(self.model).where(model.tenant_id == tenant_id)
        for key, value in (filters or {}).items():
            if key == "tenant_id":
                continue
            if key not in self._columns:
                raise ValidationException(f"Cannot filter on '{key}'", field=key)
            stmt = stmt.where(getattr(model, key) == value)
        stmt = stmt.order_by(model.id).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [self._to_result(obj) for obj in result.scalars().all()]

    async def create(self, tenant_id: str, payload: Mapping[str, Any]) -> ResultT:
        values = self._writable(payload, "create")
        obj = self.model(**values, tenant_id=tenant_id)
        self.db.add(obj)
        await self.db.flush()
        return self._to_result(obj)

    async def update(
        self, tenant_id: str, entity_id: str, patch: Mapping[str, Any]
    ) -> ResultT:
        obj = await self._resolve(tenant_id, entity_id)
        for key, value in self._writable(patch, "update").items():
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return self._to_result(obj)

    async def delete(self, tenant_id: str, entity_id: str) -> None:
        obj = await self._resolve(tenant_id, entity_id)
        await self.db.delete(obj)
        await self.db.flush()
