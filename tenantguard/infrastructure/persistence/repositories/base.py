"""Base repository: primary-key reads and savepoint-guarded inserts."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository over one model and one session.

    The session's transaction belongs to the caller (request dependency or
    service). Inserts that may hit a uniqueness constraint run inside a
    SAVEPOINT so a violation rolls back only that insert and the caller's
    transaction stays usable (Postgres aborts the whole transaction otherwise).
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _insert(self, obj: ModelType) -> ModelType:
        """Insert obj inside a SAVEPOINT; IntegrityError propagates after the savepoint rolls back."""
        async with self.db.begin_nested():
            self.db.add(obj)
            await self.db.flush()
        return obj
