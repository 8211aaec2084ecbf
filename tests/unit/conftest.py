"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.post import Post
from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.posts = AsyncMock()
        self.profiles = AsyncMock()
        self.users = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def returns_argument(mock: AsyncMock) -> None:
    """Make a repository write mock echo back what it was given."""

    async def echo(aggregate: Any) -> Any:
        return aggregate

    mock.side_effect = echo


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork whose writes echo their argument."""
    fake = FakeUnitOfWork()
    returns_argument(fake.posts.create)
    returns_argument(fake.posts.replace)
    returns_argument(fake.profiles.create)
    returns_argument(fake.profiles.replace)
    return fake


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    """A random user ID (distinct from user_id)."""
    return uuid4()


@pytest.fixture
def post(user_id: UUID) -> Post:
    """A post written by ``user_id`` with no likes or comments."""
    return Post(user_id=user_id, text="Hello developers", name="Jane")


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    """The profile of ``user_id``."""
    return Profile(user_id=user_id, status="Developer", skills=["python"])
