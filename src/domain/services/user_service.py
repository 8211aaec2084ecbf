"""User service: provisioning of account records for authenticated callers."""

from collections.abc import Callable
from typing import ClassVar
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class UserService:
    """Service layer for User records."""

    # User IDs known to have a stored record; skips a lookup per request.
    _provisioned_users: ClassVar[set[UUID]] = set()

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @classmethod
    def clear_provisioned_cache(cls) -> None:
        """Clear the provisioned-users cache. Intended for testing."""
        cls._provisioned_users.clear()

    @classmethod
    def forget(cls, user_id: UUID) -> None:
        """Drop a user from the cache after its record was deleted."""
        cls._provisioned_users.discard(user_id)

    async def ensure_user(
        self,
        user_id: UUID,
        email: str,
        name: str | None = None,
        avatar: str | None = None,
    ) -> User | None:
        """Create the user record on first sight of an identity.

        Idempotent: returns None when the record already exists. A concurrent
        request that stored the same id first is treated the same; any other
        integrity failure propagates.
        """
        if user_id in self._provisioned_users:
            return None

        async with self._uow_factory() as uow:
            existing = await uow.users.get(user_id)
            if existing:
                self._provisioned_users.add(user_id)
                return None

            user = User(
                id=user_id,
                name=name or email.split("@")[0],
                email=email,
                avatar=avatar,
            )

            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError:
                await uow.rollback()
                # Only a row stored under this id counts as a lost race
                if await uow.users.get(user_id) is None:
                    raise
                self._provisioned_users.add(user_id)
                logger.debug("user_already_provisioned", user_id=str(user_id))
                return None

            self._provisioned_users.add(user_id)
            logger.info("user_provisioned", user_id=str(user_id))
            return created
