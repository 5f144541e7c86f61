"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from accountant_backend.app.main import app
from accountant_backend.app.db.session import get_db, Base
from accountant_backend.app.core.jwt import create_access_token
from accountant_backend.app.domain.finance.invoice_lifecycle import InvoiceLifecycleManager
from accountant_backend.app.models.enums import UserRole

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Event handler to enable foreign keys for SQLite
from sqlalchemy import event
from sqlalchemy.pool import Pool

@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


@pytest.fixture(scope="session", autouse=True)
def apply_overrides():
    """Point the app at the in-memory database for the whole session."""

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides = {}

@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

# Shared session for fixture data creation
@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session

# Fresh session for reading back what was committed
@pytest.fixture
def session_factory():
    return TestingSessionLocal

@pytest.fixture
def manager():
    """Lifecycle manager with the default (permissive) transitions."""
    return InvoiceLifecycleManager()

@pytest.fixture
def strict_manager():
    return InvoiceLifecycleManager(enforce_transitions=True)


def auth_headers(user_id: str, role: UserRole) -> dict:
    token = create_access_token(data={"sub": f"user{user_id}", "user_id": user_id, "role": role.value})
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def accountant_headers():
    return auth_headers("7", UserRole.ACCOUNTANT)

@pytest.fixture
def admin_headers():
    return auth_headers("1", UserRole.ADMIN)
