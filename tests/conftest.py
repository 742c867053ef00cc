"""Pytest configuration and fixtures for tenantguard.

Every database-backed test gets its own temporary SQLite file (aiosqlite),
created from Base.metadata and seeded with the permission catalog. API tests
build a fresh app with create_app() and talk to it through httpx ASGITransport.
"""

import os
import tempfile
from collections.abc import AsyncIterator, Awaitable, Callable

# Settings are validated when tenantguard.main is imported; make that import safe.
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.gettempdir()}/tenantguard-import.db"
)
os.environ["AUTH_STRATEGY"] = "trusted_header"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["CREATE_TENANT_SECRET"] = "test-create-tenant-secret"
os.environ["TELEMETRY_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantguard.application.dtos import AuditEvent, AuditRecordResult
from tenantguard.application.services.tenant_creation_service import (
    TenantCreationResult,
    TenantCreationService,
)
from tenantguard.core.config import get_settings
from tenantguard.infrastructure.persistence import models  # noqa: F401
from tenantguard.infrastructure.persistence.database import (
    Base,
    dispose_engine,
    get_engine,
    get_session_factory,
)
from tenantguard.infrastructure.persistence.repositories import TenantRepository
from tenantguard.infrastructure.services.permission_catalog import (
    seed_missing_permissions,
)
from tenantguard.infrastructure.services.tenant_initialization_service import (
    RoleData,
    TenantInitializationService,
)
from tenantguard.shared.context import clear_context
from tenantguard.shared.utils.datetime import utc_now
from tenantguard.shared.utils.generators import generate_cuid

CREATE_TENANT_SECRET = "test-create-tenant-secret"


class RecordingAuditSink:
    """In-memory IAuditSink. Set fail=True to simulate an unavailable audit store."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.events: list[AuditEvent] = []

    async def write(self, event: AuditEvent) -> AuditRecordResult:
        if self.fail:
            raise ConnectionError("audit store unavailable")
        self.events.append(event)
        return AuditRecordResult(
            id=generate_cuid(),
            timestamp=event.timestamp or utc_now(),
            actor_id=event.actor_id,
            tenant_id=event.tenant_id,
            subject=event.subject,
            feature_area=event.feature_area,
            outcome=event.outcome.value,
            metadata=dict(event.metadata),
        )


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def failing_audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink(fail=True)


@pytest.fixture(autouse=True)
def _reset_request_context() -> None:
    clear_context()


@pytest.fixture
async def database(tmp_path, monkeypatch) -> AsyncIterator[None]:
    """Fresh SQLite database with the schema and the permission catalog."""
    monkeypatch.setenv(
        "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'tenantguard.db'}"
    )
    get_settings.cache_clear()
    await dispose_engine()
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with get_session_factory()() as session:
        async with session.begin():
            await seed_missing_permissions(session)
    yield
    await dispose_engine()
    get_settings.cache_clear()


@pytest.fixture
def session_factory(database) -> async_sessionmaker[AsyncSession]:
    return get_session_factory()


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Session for repository/integration tests. Uncommitted work is rolled back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def tenant_factory(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[TenantCreationResult]]:
    """Create and commit a tenant with default roles; the owner is granted Admin."""

    async def _create(
        code: str,
        owner_actor_id: str = "owner-1",
        default_roles: dict[str, RoleData] | None = None,
    ) -> TenantCreationResult:
        service = TenantCreationService(
            TenantRepository(db_session),
            TenantInitializationService(db_session, default_roles=default_roles),
        )
        result = await service.create_tenant(code, code.upper(), owner_actor_id)
        await db_session.commit()
        return result

    return _create


@pytest.fixture
def app(database) -> FastAPI:
    """Freshly built app bound to this test's database and settings."""
    from tenantguard.main import create_app

    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the app (ASGI). Unhandled errors come back as 500 responses."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
