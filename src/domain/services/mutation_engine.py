"""Read-modify-write orchestration for the Post and Profile aggregates."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar
from uuid import UUID

import structlog

from core.exceptions import (
    AppException,
    ConcurrentModificationError,
    PostNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.authorization import require_owner

logger = structlog.get_logger()

A = TypeVar("A", Post, Profile)
R = TypeVar("R")


class AggregateKind(StrEnum):
    """Aggregates the engine knows how to load and replace."""

    POST = "post"
    PROFILE = "profile"


_NOT_FOUND: dict[AggregateKind, Callable[[str], AppException]] = {
    AggregateKind.POST: PostNotFoundError,
    AggregateKind.PROFILE: ProfileNotFoundError,
}


@dataclass(frozen=True)
class MutationOutcome(Generic[A, R]):
    """The persisted aggregate and whatever the mutation returned."""

    aggregate: A
    result: R


class AggregateMutationEngine:
    """Apply one mutation to one aggregate inside one Unit of Work.

    Each call fetches the aggregate, optionally checks that ``owner_id``
    owns it, runs ``mutation`` in memory, then replaces the whole stored
    aggregate. The replace is guarded by the version read at fetch time,
    so a concurrent writer surfaces as ConcurrentModificationError instead
    of a lost update. If the aggregate was deleted in the meantime the
    call fails with the NotFound error of its kind. Nothing is retried here.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @staticmethod
    def _repository(uow: IUnitOfWork, kind: AggregateKind) -> Any:
        if kind is AggregateKind.POST:
            return uow.posts
        return uow.profiles

    async def apply(
        self,
        kind: AggregateKind,
        aggregate_id: UUID,
        mutation: Callable[[A], R],
        owner_id: UUID | None = None,
    ) -> MutationOutcome[A, R]:
        """Fetch, authorize, mutate and replace a single aggregate.

        Args:
            kind: Which aggregate ``aggregate_id`` refers to.
            aggregate_id: Primary key of the aggregate.
            mutation: Synchronous function mutating the aggregate in place.
                Errors it raises abort the call before anything is written.
            owner_id: Caller to check against the aggregate owner, or None
                when the operation is not owner-scoped at aggregate level.

        Returns:
            The replaced aggregate (with its new version) and the mutation's
            return value.
        """
        async with self._uow_factory() as uow:
            repository = self._repository(uow, kind)

            aggregate = await repository.get(aggregate_id)
            if aggregate is None:
                raise _NOT_FOUND[kind](str(aggregate_id))

            if owner_id is not None:
                require_owner(owner_id, aggregate.owner_id)

            result = mutation(aggregate)

            try:
                saved = await repository.replace(aggregate)
            except ConcurrentModificationError:
                # A row deleted since the read is reported as missing
                if await repository.get(aggregate_id) is None:
                    raise _NOT_FOUND[kind](str(aggregate_id)) from None
                raise
            await uow.commit()

            logger.debug(
                "aggregate_replaced",
                kind=kind.value,
                aggregate_id=str(aggregate_id),
                version=saved.version,
            )
            return MutationOutcome(aggregate=saved, result=result)
