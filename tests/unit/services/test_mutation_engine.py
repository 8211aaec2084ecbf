"""Unit tests for AggregateMutationEngine."""

from functools import partial
from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AlreadyLikedError,
    AuthorizationError,
    ConcurrentModificationError,
    PostNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.mutations import likes
from domain.services.mutation_engine import AggregateKind, AggregateMutationEngine
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def engine(uow: FakeUnitOfWork) -> AggregateMutationEngine:
    return AggregateMutationEngine(lambda: uow)


class TestApply:
    @pytest.mark.asyncio
    async def test_mutates_and_replaces_post(
        self, engine: AggregateMutationEngine, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        outcome = await engine.apply(
            AggregateKind.POST, post.id, partial(likes.like, user_id=user_id)
        )

        assert outcome.aggregate is post
        assert outcome.result is post.likes
        uow.posts.replace.assert_called_once_with(post)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(
        self, engine: AggregateMutationEngine, uow: FakeUnitOfWork
    ):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await engine.apply(AggregateKind.POST, uuid4(), lambda post: None)

        uow.posts.replace.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_missing_profile_raises_not_found(
        self, engine: AggregateMutationEngine, uow: FakeUnitOfWork
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await engine.apply(AggregateKind.PROFILE, uuid4(), lambda profile: None)

    @pytest.mark.asyncio
    async def test_failed_mutation_writes_nothing(
        self, engine: AggregateMutationEngine, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        likes.like(post, user_id)
        uow.posts.get.return_value = post

        with pytest.raises(AlreadyLikedError):
            await engine.apply(AggregateKind.POST, post.id, partial(likes.like, user_id=user_id))

        uow.posts.replace.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_owner_check_runs_before_mutation(
        self,
        engine: AggregateMutationEngine,
        uow: FakeUnitOfWork,
        profile: Profile,
        other_user_id: UUID,
    ):
        uow.profiles.get.return_value = profile
        calls: list[Profile] = []

        with pytest.raises(AuthorizationError):
            await engine.apply(
                AggregateKind.PROFILE, profile.id, calls.append, owner_id=other_user_id
            )

        assert calls == []
        uow.profiles.replace.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_replace_is_surfaced(
        self, engine: AggregateMutationEngine, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post
        uow.posts.replace.side_effect = ConcurrentModificationError("post", str(post.id))

        with pytest.raises(ConcurrentModificationError) as exc_info:
            await engine.apply(AggregateKind.POST, post.id, partial(likes.like, user_id=user_id))

        assert exc_info.value.status_code == 409
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_aggregate_deleted_before_replace_is_not_found(
        self, engine: AggregateMutationEngine, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.side_effect = [post, None]
        uow.posts.replace.side_effect = ConcurrentModificationError("post", str(post.id))

        with pytest.raises(PostNotFoundError):
            await engine.apply(AggregateKind.POST, post.id, partial(likes.like, user_id=user_id))

        assert not uow.committed
