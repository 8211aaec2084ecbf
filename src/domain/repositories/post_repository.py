"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for the Post aggregate."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post with its likes and comments."""
        ...

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def get_all_for_user(self, user_id: UUID) -> list[Post]:
        """Get all posts written by a user."""
        ...

    async def create(self, post: Post) -> Post:
        """Insert a new post."""
        ...

    async def replace(self, post: Post) -> Post:
        """Overwrite the whole stored post.

        Raises ConcurrentModificationError if the stored version no longer
        matches ``post.version``. Returns the post with its new version.
        """
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post written by a user and return the count."""
        ...
