"""Comment collection of a post."""

from uuid import UUID, uuid4

from core.exceptions import CommentNotFoundError, ValidationError
from domain.entities.post import Comment, Post
from domain.mutations.sequence import find_by_id, prepend, remove_entry
from domain.services.authorization import require_owner


def _new_comment_id(post: Post) -> UUID:
    comment_id = uuid4()
    while find_by_id(post.comments, comment_id) is not None:
        comment_id = uuid4()
    return comment_id


def add_comment(
    post: Post,
    user_id: UUID,
    name: str,
    avatar: str | None,
    text: str,
) -> list[Comment]:
    """Insert a new comment at the front and return the comment list."""
    if not text or not text.strip():
        raise ValidationError("text", "Text is required")

    comment = Comment(
        id=_new_comment_id(post),
        user_id=user_id,
        text=text,
        name=name,
        avatar=avatar,
    )
    prepend(post.comments, comment)
    return post.comments


def remove_comment(post: Post, comment_id: UUID, user_id: UUID) -> Comment:
    """Remove a comment written by the caller and return it.

    Only the comment author may remove it; the post author has no say.
    """
    comment = find_by_id(post.comments, comment_id)
    if comment is None:
        raise CommentNotFoundError(str(comment_id))

    require_owner(user_id, comment.user_id)

    remove_entry(post.comments, comment)
    return comment
