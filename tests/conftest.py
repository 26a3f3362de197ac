"""Pytest fixtures for wedding platform integration tests."""

import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event as sa_event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from wedding_platform.app import app
from wedding_platform.database.base import Base
from wedding_platform.database.session import get_db
from wedding_platform.models import Event, Guest, Tenant, User, UserRole, Wedding
from wedding_platform.modules.tenancy.auth import create_access_token
from wedding_platform.modules.tenancy.cache import TenantCache
from wedding_platform.modules.tenancy.dependencies import get_tenant_cache
from wedding_platform.modules.tenancy.router import limiter as tenancy_limiter


@dataclass
class SeededTenant:
    """Ids and credentials of one couple created for a test."""

    tenant_id: uuid.UUID
    subdomain: str
    wedding_id: uuid.UUID
    user_id: uuid.UUID
    email: str
    guest_id: uuid.UUID
    rsvp_code: str
    event_id: uuid.UUID

    @property
    def token(self) -> str:
        return create_access_token(self.user_id, self.email, UserRole.COUPLE, tenant_id=self.tenant_id)

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


async def _seed_tenant(
    session: AsyncSession,
    subdomain: str,
    partners: tuple[str, str],
    guest_name: str,
    rsvp_code: str,
) -> SeededTenant:
    tenant = Tenant(subdomain=subdomain, name=f"{partners[0]} & {partners[1]}")
    session.add(tenant)
    await session.flush()

    wedding = Wedding(
        tenant_id=tenant.id,
        partner1_name=partners[0],
        partner2_name=partners[1],
        wedding_date=date(2026, 6, 20),
        is_published=True,
    )
    email = f"{subdomain}@example.com"
    user = User(email=email, name=tenant.name, role=UserRole.COUPLE, tenant_id=tenant.id)
    session.add_all([wedding, user])
    await session.flush()

    guest = Guest(wedding_id=wedding.id, name=guest_name, rsvp_code=rsvp_code, allow_plus_one=True)
    event = Event(
        wedding_id=wedding.id,
        name="Ceremony",
        starts_at=datetime(2026, 6, 20, 15, 0, tzinfo=timezone.utc),
        location="Town Hall",
    )
    session.add_all([guest, event])
    await session.flush()

    return SeededTenant(
        tenant_id=tenant.id,
        subdomain=subdomain,
        wedding_id=wedding.id,
        user_id=user.id,
        email=email,
        guest_id=guest.id,
        rsvp_code=rsvp_code,
        event_id=event.id,
    )


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Rate limiter storage is process-wide; start every test with a clean slate."""
    tenancy_limiter.reset()
    yield


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """A file-backed SQLite database per test, so concurrent sessions share data."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'wedding.db'}")

    @sa_event.listens_for(test_engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        # ON DELETE CASCADE only fires with this pragma
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def alice(session_factory: async_sessionmaker[AsyncSession]) -> SeededTenant:
    async with session_factory() as session:
        seeded = await _seed_tenant(session, "alice", ("Alice", "Sam"), "Grandma Alice", "ALICE001")
        await session.commit()
    return seeded


@pytest_asyncio.fixture
async def bob(session_factory: async_sessionmaker[AsyncSession]) -> SeededTenant:
    async with session_factory() as session:
        seeded = await _seed_tenant(session, "bob", ("Bob", "Robin"), "Uncle Bob", "BOB00001")
        await session.commit()
    return seeded


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = create_access_token(uuid.uuid4(), "ops@example.com", UserRole.ADMIN)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def redis_mock() -> AsyncMock:
    """Stand-in for redis.asyncio.Redis: every lookup is a cache miss."""
    client = AsyncMock()
    client.get.return_value = None
    return client


@pytest.fixture
def redis_store(redis_mock: AsyncMock) -> dict[str, str]:
    """Back ``redis_mock`` with a dict so cached entries are served until deleted."""
    store: dict[str, str] = {}
    redis_mock.get.side_effect = lambda key: store.get(key)
    redis_mock.set.side_effect = lambda key, value, ex=None: store.__setitem__(key, value)
    redis_mock.delete.side_effect = lambda key: int(store.pop(key, None) is not None)
    return store


@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
    redis_mock: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient wired to the FastAPI app with a test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tenant_cache] = lambda: TenantCache(redis_mock)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
