"""Post aggregate: a post with its likes and comments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A single user's like on a post."""

    user_id: UUID


@dataclass
class Comment:
    """Comment embedded in a post.

    ``user_id`` is the comment author, independent of the post author.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``likes`` and ``comments`` are newest-first and are persisted together
    with the post as one document. ``version`` is the optimistic
    concurrency counter read at fetch time.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 0

    @property
    def owner_id(self) -> UUID:
        return self.user_id
