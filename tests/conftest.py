"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Callable

# Must be set before any app imports that trigger Settings validation.
TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = TEST_JWT_SECRET
os.environ["DEV_MODE"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.config import Settings, get_settings  # noqa: E402
from db.session import enable_sqlite_foreign_keys  # noqa: E402
from models.base import Base  # noqa: E402
from models.user import User  # noqa: E402


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create a fresh in-memory SQLite engine per test.

    StaticPool keeps the single in-memory database alive across connections,
    and each test gets its own database, so tests don't affect each other.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the per-test database."""
    session_factory = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    """Settings as seen by the app under test (reads the env set above)."""
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create the default test user."""
    user = User(email="test@example.com", first_name="Test", last_name="User")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """Create a second user who must never see test_user's bookmarks."""
    user = User(email="other@example.com", first_name="Other", last_name="User")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers_for(settings: Settings) -> Callable[[User], dict[str, str]]:
    """Factory building an Authorization header with a valid token for a user."""
    from core.auth import create_access_token  # noqa: PLC0415

    def build(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id, settings)}"}

    return build


@pytest.fixture
async def unauthenticated_client(
    db_session: AsyncSession,
    settings: Settings,  # noqa: ARG001
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session override and no credentials."""
    from api.main import app  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(
    unauthenticated_client: AsyncClient,
    test_user: User,
    auth_headers_for: Callable[[User], dict[str, str]],
) -> AsyncClient:
    """Create a test client authenticated as test_user via a bearer token."""
    unauthenticated_client.headers.update(auth_headers_for(test_user))
    return unauthenticated_client
