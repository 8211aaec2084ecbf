"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one connection shared by all sessions)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user IDs for consistency
TEST_USER_ID = uuid4()
OTHER_USER_ID = uuid4()

ClientFactory = Callable[[TokenUser], AsyncContextManager[AsyncClient]]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second user, for ownership checks."""
    return TokenUser(
        id=OTHER_USER_ID,
        email="other@example.com",
        display_name="Other User",
        avatar_url="https://example.com/other.png",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no database)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def client_for(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
) -> ClientFactory:
    """
    Build test clients acting as a given user.

    Each client:
    - Uses the per-test in-memory SQLite database
    - Has a stored user record for its identity
    - Overrides auth to return that identity directly
    - Overrides the services to use the test UoW factory
    """
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.v1.dependencies import get_post_service, get_profile_service
    from domain.services.mutation_engine import AggregateMutationEngine
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from infrastructure.database.session import get_async_session
    from main import create_app

    mutation_engine = AggregateMutationEngine(uow_factory)

    @asynccontextmanager
    async def build(user: TokenUser) -> AsyncGenerator[AsyncClient, None]:
        async with session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user.id))
            if not result.scalar_one_or_none():
                session.add(
                    UserModel(
                        id=user.id,
                        name=user.display_name or user.email.split("@")[0],
                        email=user.email,
                        avatar=user.avatar_url,
                    )
                )
                await session.commit()

        app = create_app()

        async def override_get_user() -> TokenUser:
            return user

        async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_current_user] = override_get_user
        app.dependency_overrides[get_auth_provider] = lambda: auth_provider
        app.dependency_overrides[get_post_service] = lambda: PostService(
            uow_factory, engine=mutation_engine
        )
        app.dependency_overrides[get_profile_service] = lambda: ProfileService(
            uow_factory, engine=mutation_engine
        )
        app.dependency_overrides[get_async_session] = override_get_session

        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                yield c
        finally:
            app.dependency_overrides.clear()
            UserService.clear_provisioned_cache()

    return build


@pytest.fixture
async def authenticated_client(
    client_for: ClientFactory, test_user: TokenUser
) -> AsyncGenerator[AsyncClient, None]:
    """Client acting as ``test_user``."""
    async with client_for(test_user) as c:
        yield c


@pytest.fixture
async def other_client(
    client_for: ClientFactory, other_user: TokenUser
) -> AsyncGenerator[AsyncClient, None]:
    """Client acting as ``other_user``."""
    async with client_for(other_user) as c:
        yield c
