"""
Security test fixtures.

Two users, one bookmark each, and a client per user authenticated with
its own bearer token. Both clients share the per-test database session.
"""
from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.user import User


@pytest.fixture
async def user_a(db_session: AsyncSession) -> User:
    """Create the first test user (User A)."""
    user = User(email="user-a@test.com")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def user_b(db_session: AsyncSession) -> User:
    """Create a second test user (User B) for IDOR testing."""
    user = User(email="user-b@test.com")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def user_a_bookmark(db_session: AsyncSession, user_a: User) -> Bookmark:
    """Create a bookmark belonging to User A."""
    bookmark = Bookmark(
        user_id=user_a.id,
        title="User A's Private Bookmark",
        description="This should only be accessible to User A",
        link="https://user-a-bookmark.example.com/",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def user_b_bookmark(db_session: AsyncSession, user_b: User) -> Bookmark:
    """Create a bookmark belonging to User B."""
    bookmark = Bookmark(
        user_id=user_b.id,
        title="User B's Private Bookmark",
        description="This should only be accessible to User B",
        link="https://user-b-bookmark.example.com/",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def client_factory(
    db_session: AsyncSession,
    auth_headers_for: Callable[[User], dict[str, str]],
) -> AsyncGenerator[Callable[[User], AsyncClient]]:
    """
    Factory fixture that creates test clients authenticated as a specific user.

    Clients are closed and dependency overrides cleared at teardown.
    """
    from api.main import app  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    clients: list[AsyncClient] = []

    def create_client(user: User) -> AsyncClient:
        test_client = AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers=auth_headers_for(user),
        )
        clients.append(test_client)
        return test_client

    yield create_client

    for test_client in clients:
        await test_client.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
def client_as_user_a(
    client_factory: Callable[[User], AsyncClient],
    user_a: User,
) -> AsyncClient:
    """Client authenticated as User A."""
    return client_factory(user_a)


@pytest.fixture
def client_as_user_b(
    client_factory: Callable[[User], AsyncClient],
    user_b: User,
) -> AsyncClient:
    """Client authenticated as User B."""
    return client_factory(user_b)
