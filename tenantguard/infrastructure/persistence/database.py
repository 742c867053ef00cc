"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (tenantguard/infrastructure/persistence/migrations).

Engine and session factory are created lazily on first use (get_db /
get_db_transactional / get_session_factory) so import does not trigger
Settings validation.

SQLite (aiosqlite) is supported for local runs and tests. The connection
is put in WAL mode with foreign keys on and explicit BEGIN, so ON DELETE
CASCADE/RESTRICT and SAVEPOINTs behave as on Postgres and a reader does
not block the audit writer.
"""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from tenantguard.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _install_sqlite_pragmas(async_engine: Any) -> None:
    """Foreign keys, WAL and explicit BEGIN for every pooled sqlite connection."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        # Let SQLAlchemy emit BEGIN itself; pysqlite's implicit handling breaks SAVEPOINT.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    url = settings.database_url
    engine_kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if _is_sqlite(url):
        engine_kwargs["poolclass"] = NullPool
    else:
        connect_args: dict[str, Any] = {}
        if "asyncpg" in url:
            connect_args["command_timeout"] = settings.db_command_timeout or 60
        engine_kwargs.update(
            pool_pre_ping=True,
            pool_size=settings.db_pool_size if settings.db_pool_size is not None else 20,
            max_overflow=(
                settings.db_max_overflow if settings.db_max_overflow is not None else 30
            ),
            pool_recycle=3600,
            connect_args=connect_args,
        )
    engine = create_async_engine(url, **engine_kwargs)
    if _is_sqlite(url):
        _install_sqlite_pragmas(engine)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> Any:
    """Return the lazily created async engine."""
    _ensure_engine()
    return engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory (used by the audit sink and maintenance scripts)."""
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Dispose the engine and forget it so the next use rebuilds from settings."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None


async def get_db():
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        yield session


async def get_db_transactional():
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    Use for POST, PUT, PATCH, DELETE endpoints.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        async with session.begin():
            yield session
