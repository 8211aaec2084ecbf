"""Unit tests for like toggling."""

from copy import deepcopy
from uuid import UUID, uuid4

import pytest

from core.exceptions import AlreadyLikedError, ErrorCode, NotLikedError
from domain.entities.post import Like, Post
from domain.mutations import likes


class TestLike:
    def test_adds_like_at_front(self, post: Post, user_id: UUID, other_user_id: UUID):
        likes.like(post, other_user_id)
        likes.like(post, user_id)

        assert [like.user_id for like in post.likes] == [user_id, other_user_id]

    def test_returns_the_post_likes(self, post: Post, user_id: UUID):
        result = likes.like(post, user_id)

        assert result is post.likes

    def test_rejects_second_like_by_same_user(self, post: Post, user_id: UUID):
        likes.like(post, user_id)

        with pytest.raises(AlreadyLikedError) as exc_info:
            likes.like(post, user_id)

        assert exc_info.value.error_code == ErrorCode.ALREADY_LIKED
        assert exc_info.value.status_code == 400
        assert len(post.likes) == 1

    def test_author_may_like_own_post(self, post: Post):
        likes.like(post, post.user_id)

        assert likes.find_like(post, post.user_id) is not None


class TestUnlike:
    def test_removes_only_the_callers_like(
        self, post: Post, user_id: UUID, other_user_id: UUID
    ):
        post.likes = [Like(user_id=other_user_id), Like(user_id=user_id)]

        result = likes.unlike(post, user_id)

        assert [like.user_id for like in result] == [other_user_id]

    def test_rejects_unlike_without_like(self, post: Post, user_id: UUID):
        post.likes = [Like(user_id=uuid4())]

        with pytest.raises(NotLikedError) as exc_info:
            likes.unlike(post, user_id)

        assert exc_info.value.message == "Post has not yet been liked"
        assert len(post.likes) == 1

    def test_like_after_unlike_succeeds(self, post: Post, user_id: UUID):
        likes.like(post, user_id)
        likes.unlike(post, user_id)
        likes.like(post, user_id)

        assert len(post.likes) == 1

    def test_like_then_unlike_restores_likes(self, post: Post, user_id: UUID):
        post.likes = [Like(user_id=uuid4()), Like(user_id=uuid4())]
        before = deepcopy(post.likes)

        likes.like(post, user_id)
        likes.unlike(post, user_id)

        assert post.likes == before
