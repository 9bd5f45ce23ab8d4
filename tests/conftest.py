"""Pytest configuration and shared fixtures."""

import os


# Must be set before machine_emu.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789-abcdefghijklmnop")

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from machine_emu.core.database import Base, get_db
from machine_emu.main import create_app
from machine_emu.seeding import SeedReport, seed_database
from tests.helpers import login

# Import all models to ensure they're registered with Base.metadata
from machine_emu.core.permissions.models import Permission, Role, RolePermission, UserRole  # noqa: F401
from machine_emu.modules.cars.models import Car, CarStatus  # noqa: F401
from machine_emu.modules.motorcycles.models import Motorcycle, MotorcycleStatus  # noqa: F401
from machine_emu.modules.users.models import User  # noqa: F401


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide the database session shared by the test and the app."""
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Seeded Store Fixtures
# ============================================================


@pytest.fixture
async def seeded(db: AsyncSession) -> SeedReport:
    """Seed roles, permissions, default accounts and demo vehicles."""
    return await seed_database(db)


@pytest.fixture
async def admin_headers(client: AsyncClient, seeded: SeedReport) -> dict[str, str]:
    """Bearer headers for the seeded admin account."""
    return await login(client, "admin", "admin123")


@pytest.fixture
async def user_headers(client: AsyncClient, seeded: SeedReport) -> dict[str, str]:
    """Bearer headers for the seeded user account."""
    return await login(client, "user", "user123")
