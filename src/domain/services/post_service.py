"""Post service layer with business logic."""

from collections.abc import Callable
from functools import partial
from uuid import UUID

import structlog

from core.exceptions import PostNotFoundError, UserNotFoundError, ValidationError
from domain.entities.post import Comment, Like, Post
from domain.mutations import comments, likes
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.authorization import require_owner
from domain.services.mutation_engine import AggregateKind, AggregateMutationEngine

logger = structlog.get_logger()


class PostService:
    """Service layer for posts, likes and comments."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        engine: AggregateMutationEngine | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._engine = engine or AggregateMutationEngine(uow_factory)

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_all_for_user(self, user_id: UUID) -> list[Post]:
        """Get the posts written by one user, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all_for_user(user_id)  # type: ignore[no-any-return]

    async def get_by_id(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return post

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, stamping the author's current name and avatar."""
        if not text or not text.strip():
            raise ValidationError("text", "Text is required")

        async with self._uow_factory() as uow:
            author = await uow.users.get(user_id)
            if not author:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

            logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
            return created

    async def delete(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            require_owner(user_id, post.user_id, "You are not allowed to delete this post")

            deleted = await uow.posts.delete(post_id)
            await uow.commit()

            logger.info("post_deleted", post_id=str(post_id), user_id=str(user_id))
            return deleted  # type: ignore[no-any-return]

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Like a post. Fails if the caller already likes it."""
        outcome = await self._engine.apply(
            AggregateKind.POST, post_id, partial(likes.like, user_id=user_id)
        )
        logger.info("post_liked", post_id=str(post_id), user_id=str(user_id))
        return outcome.aggregate.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Withdraw a like. Fails if the caller has not liked the post."""
        outcome = await self._engine.apply(
            AggregateKind.POST, post_id, partial(likes.unlike, user_id=user_id)
        )
        logger.info("post_unliked", post_id=str(post_id), user_id=str(user_id))
        return outcome.aggregate.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Comment on a post and return the post's comments, newest first."""
        async with self._uow_factory() as uow:
            author = await uow.users.get(user_id)
        if not author:
            raise UserNotFoundError(str(user_id))

        outcome = await self._engine.apply(
            AggregateKind.POST,
            post_id,
            partial(
                comments.add_comment,
                user_id=user_id,
                name=author.name,
                avatar=author.avatar,
                text=text,
            ),
        )
        logger.info("comment_added", post_id=str(post_id), user_id=str(user_id))
        return outcome.aggregate.comments

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> list[Comment]:
        """Delete one of the caller's own comments."""
        outcome = await self._engine.apply(
            AggregateKind.POST,
            post_id,
            partial(comments.remove_comment, comment_id=comment_id, user_id=user_id),
        )
        logger.info(
            "comment_removed",
            post_id=str(post_id),
            comment_id=str(comment_id),
            user_id=str(user_id),
        )
        return outcome.aggregate.comments
