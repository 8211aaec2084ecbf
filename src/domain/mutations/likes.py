"""Like toggling on a post.

Repeating ``like`` or ``unlike`` without the opposite call in between is an
error, not a no-op.
"""

from uuid import UUID

from core.exceptions import AlreadyLikedError, NotLikedError
from domain.entities.post import Like, Post
from domain.mutations.sequence import find_first, prepend, remove_entry


def find_like(post: Post, user_id: UUID) -> Like | None:
    return find_first(post.likes, lambda like: like.user_id == user_id)


def like(post: Post, user_id: UUID) -> list[Like]:
    """Add the caller's like at the front of ``post.likes``."""
    if find_like(post, user_id) is not None:
        raise AlreadyLikedError(str(post.id))
    prepend(post.likes, Like(user_id=user_id))
    return post.likes


def unlike(post: Post, user_id: UUID) -> list[Like]:
    """Remove the caller's like from ``post.likes``."""
    existing = find_like(post, user_id)
    if existing is None:
        raise NotLikedError(str(post.id))
    remove_entry(post.likes, existing)
    return post.likes
