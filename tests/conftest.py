"""Pytest configuration and fixtures.

Repository and HTTP tests run against in-memory SQLite (aiosqlite) with the
ORM metadata created directly; no Postgres needed. HTTP tests build the app
with create_app(tenant_lookup=...) and override the DB session dependencies.
"""

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from saas.application.dtos.tenant import TenantCreate, TenantResult
from saas.application.services.tenant_service import TenantService
from saas.domain.enums import SubscriptionTier
from saas.infrastructure.persistence import models  # noqa: F401
from saas.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
)
from saas.infrastructure.persistence.repositories import TenantRepository
from saas.main import create_app


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Let SQLAlchemy emit BEGIN itself so SAVEPOINT (begin_nested) behaves.
    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Session for repository tests. Rolled back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_tenant(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[TenantResult]]:
    """Create and commit a tenant (visible to every later session)."""

    async def _make(
        subdomain: str = "acme",
        *,
        tier: SubscriptionTier = SubscriptionTier.FREE,
        quota_limit: int | None = None,
        is_active: bool = True,
    ) -> TenantResult:
        async with session_factory() as session, session.begin():
            return await TenantService(TenantRepository(session)).create_tenant(
                TenantCreate(
                    subdomain=subdomain,
                    name=subdomain.title(),
                    subscription_tier=tier,
                    quota_limit=quota_limit,
                    is_active=is_active,
                )
            )

    return _make


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    async def lookup(subdomain: str) -> TenantResult | None:
        async with session_factory() as session:
            return await TenantRepository(session).get_by_subdomain(subdomain)

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _get_db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            async with session.begin():
                yield session

    application = create_app(tenant_lookup=lookup)
    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_db_transactional] = _get_db_transactional
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
