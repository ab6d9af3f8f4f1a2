"""Shared test fixtures for the panel API."""

import os

# Set test secrets before any app imports trigger Settings() validation.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-for-unit-tests")
os.environ.setdefault("SETTINGS_ENCRYPTION_KEY", "test-encryption-key-for-unit-tests")

import uuid  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402

import fakeredis.aioredis  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine as create_sync_engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from panel_api.config import get_settings  # noqa: E402
from panel_api.core.secrets import SettingsCipher  # noqa: E402
from panel_api.main import app  # noqa: E402
from panel_api.models import Base  # noqa: E402
from panel_api.rate_limit import limiter  # noqa: E402
from panel_api.repositories.settings_repository import SettingsRepository  # noqa: E402
from panel_api.services.settings_service import SettingsService  # noqa: E402
from tests.helpers.token_factory import create_access_token  # noqa: E402

# ---------------------------------------------------------------------------
# Database: a throwaway SQLite file per test
# ---------------------------------------------------------------------------


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "panel.db"


@pytest_asyncio.fixture()
async def engine(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def sync_session(engine, db_path):
    """Synchronous session on the same database, as used by Celery tasks.

    Depends on ``engine`` so the schema exists.
    """
    sync_engine = create_sync_engine(f"sqlite:///{db_path}", poolclass=NullPool)
    session = sessionmaker(bind=sync_engine)()
    yield session
    session.close()
    sync_engine.dispose()


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture()
def cipher() -> SettingsCipher:
    return SettingsCipher(get_settings().settings_encryption_key)


@pytest_asyncio.fixture()
async def settings_service(db_session, cipher) -> SettingsService:
    return SettingsService(SettingsRepository(db_session), cipher)


# ---------------------------------------------------------------------------
# Fake Redis (drop-in async replacement)
# ---------------------------------------------------------------------------


def _make_fake_redis():
    """Create a fakeredis instance that behaves like redis.asyncio.Redis."""
    return fakeredis.aioredis.FakeRedis(decode_responses=True)


@pytest_asyncio.fixture()
async def redis_client():
    client = _make_fake_redis()
    yield client
    await client.aclose()


# ---------------------------------------------------------------------------
# HTTP client fixture (FastAPI app on the test database)
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    limiter.reset()
    yield


@pytest.fixture(autouse=True)
def queued_deliveries(monkeypatch) -> list[str]:
    """Capture webhook hand-offs instead of publishing to the broker."""
    queued: list[str] = []
    monkeypatch.setattr("panel_api.api.v1.webhooks.enqueue_delivery", queued.append)
    return queued


@pytest_asyncio.fixture()
async def client(engine, session_factory, redis_client) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the FastAPI app.

    The lifespan is not run; the test database and a fake Redis are placed
    on ``app.state`` instead.
    """
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.redis = redis_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Auth helpers: generate JWT tokens directly (no login endpoint needed)
# ---------------------------------------------------------------------------


def _make_token(role: str, username: str) -> str:
    """Create a valid JWT access token for testing."""
    return create_access_token(
        user_id=str(uuid.uuid4()),
        role=role,
        username=username,
        email=f"{username}@test.kafkasder.org",
    )


def _auth_headers(role: str, username: str | None = None) -> dict[str, str]:
    """Return Authorization header dict with a valid JWT."""
    token = _make_token(role, username or role)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def admin_client(client) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client pre-authenticated as admin user."""
    client.headers.update(_auth_headers("admin"))
    yield client
    client.headers.pop("Authorization", None)


@pytest_asyncio.fixture()
async def super_admin_client(client) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client pre-authenticated as super_admin user."""
    client.headers.update(_auth_headers("super_admin"))
    yield client
    client.headers.pop("Authorization", None)


@pytest_asyncio.fixture()
async def staff_client(client) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client pre-authenticated as staff user."""
    client.headers.update(_auth_headers("staff"))
    yield client
    client.headers.pop("Authorization", None)


# ---------------------------------------------------------------------------
# Factory helpers (payload dicts for HTTP requests)
# ---------------------------------------------------------------------------


def make_theme_payload(**overrides) -> dict:
    data = {
        "description": "A preset for testing",
        "colors": {"primary": "#1e40af", "background": "#ffffff"},
        "typography": {"fontFamily": "Inter"},
        "layout": {"borderRadius": 8},
    }
    data.update(overrides)
    return data


def make_donation_payload(**overrides) -> dict:
    data = {
        "donor_name": "Ayşe Yılmaz",
        "amount": 250.0,
        "receipt_number": f"RCPT-{uuid.uuid4().hex[:8]}",
    }
    data.update(overrides)
    return data
