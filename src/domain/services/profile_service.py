"""Profile service layer with business logic."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import (
    PartialCascadeFailureError,
    ProfileNotFoundError,
    RepositoryError,
)
from domain.entities.profile import Education, Experience, Profile
from domain.mutations.profile_fields import apply_profile_fields
from domain.mutations.subrecords import EDUCATION, EXPERIENCE
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.authorization import require_owner
from domain.services.mutation_engine import AggregateKind, AggregateMutationEngine
from domain.services.user_service import UserService

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class AccountDeletion:
    """Summary of a completed account cascade."""

    posts_deleted: int
    profile_deleted: bool
    user_deleted: bool


class ProfileService:
    """Service layer for profiles and their experience/education entries."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        engine: AggregateMutationEngine | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._engine = engine or AggregateMutationEngine(uow_factory)

    async def get_all(self) -> list[Profile]:
        """Get all profiles."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def get_for_user(self, user_id: UUID) -> Profile:
        """Get the profile owned by a user."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id), field="user_id")
            return profile

    async def upsert(self, user_id: UUID, fields: dict[str, Any]) -> Profile:
        """Create the caller's profile, or overwrite the supplied fields of it.

        Fields missing from ``fields`` stay unset on create and unchanged on
        update.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)

            if profile is None:
                profile = apply_profile_fields(Profile(user_id=user_id), fields)
                saved = await uow.profiles.create(profile)
                action = "profile_created"
            else:
                apply_profile_fields(profile, fields)
                profile.updated_at = datetime.utcnow()
                saved = await uow.profiles.replace(profile)
                action = "profile_updated"

            await uow.commit()

            logger.info(action, profile_id=str(saved.id), user_id=str(user_id))
            return saved

    async def delete_account(self, user_id: UUID) -> AccountDeletion:
        """Delete the caller's posts, profile and user record together.

        The three deletes share one transaction. When a step fails after an
        earlier one went through, the transaction is rolled back and
        PartialCascadeFailureError reports what had been done.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id), field="user_id")

            require_owner(user_id, profile.user_id)

            steps: list[tuple[str, Callable[[], Awaitable[Any]]]] = [
                ("posts", partial(uow.posts.delete_all_for_user, user_id)),
                ("profile", partial(uow.profiles.delete, profile.id)),
                ("user", partial(uow.users.delete, user_id)),
            ]
            results: dict[str, Any] = {}
            for step, action in steps:
                try:
                    results[step] = await action()
                except RepositoryError:
                    if not results:
                        raise
                    completed = list(results)
                    rolled_back = await self._rollback_cascade(uow, user_id)
                    logger.error(
                        "account_cascade_failed",
                        user_id=str(user_id),
                        completed=completed,
                        failed=step,
                        rolled_back=rolled_back,
                    )
                    raise PartialCascadeFailureError(completed, step, rolled_back)

            await uow.commit()

        UserService.forget(user_id)
        logger.info(
            "account_deleted",
            user_id=str(user_id),
            posts_deleted=results["posts"],
        )
        return AccountDeletion(
            posts_deleted=results["posts"],
            profile_deleted=bool(results["profile"]),
            user_deleted=bool(results["user"]),
        )

    @staticmethod
    async def _rollback_cascade(uow: IUnitOfWork, user_id: UUID) -> bool:
        try:
            await uow.rollback()
        except Exception:
            logger.exception("account_cascade_rollback_failed", user_id=str(user_id))
            return False
        return True

    async def add_experience(
        self, profile_id: UUID, user_id: UUID, fields: dict[str, Any]
    ) -> list[Experience]:
        """Add an experience entry to a profile the caller owns."""
        outcome = await self._engine.apply(
            AggregateKind.PROFILE,
            profile_id,
            partial(EXPERIENCE.add, user_id=user_id, fields=fields),
            owner_id=user_id,
        )
        logger.info("experience_added", profile_id=str(profile_id))
        return outcome.aggregate.experience

    async def remove_experience(
        self, profile_id: UUID, experience_id: UUID, user_id: UUID
    ) -> list[Experience]:
        """Remove an experience entry from a profile the caller owns."""
        outcome = await self._engine.apply(
            AggregateKind.PROFILE,
            profile_id,
            partial(EXPERIENCE.remove, record_id=experience_id, user_id=user_id),
            owner_id=user_id,
        )
        logger.info(
            "experience_removed",
            profile_id=str(profile_id),
            experience_id=str(experience_id),
        )
        return outcome.aggregate.experience

    async def add_education(
        self, profile_id: UUID, user_id: UUID, fields: dict[str, Any]
    ) -> list[Education]:
        """Add an education entry to a profile the caller owns."""
        outcome = await self._engine.apply(
            AggregateKind.PROFILE,
            profile_id,
            partial(EDUCATION.add, user_id=user_id, fields=fields),
            owner_id=user_id,
        )
        logger.info("education_added", profile_id=str(profile_id))
        return outcome.aggregate.education

    async def remove_education(
        self, profile_id: UUID, education_id: UUID, user_id: UUID
    ) -> list[Education]:
        """Remove an education entry from a profile the caller owns."""
        outcome = await self._engine.apply(
            AggregateKind.PROFILE,
            profile_id,
            partial(EDUCATION.remove, record_id=education_id, user_id=user_id),
            owner_id=user_id,
        )
        logger.info(
            "education_removed",
            profile_id=str(profile_id),
            education_id=str(education_id),
        )
        return outcome.aggregate.education
