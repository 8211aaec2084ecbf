"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.mutation_engine import AggregateMutationEngine
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_mutation_engine() -> AggregateMutationEngine:
    """Get the shared aggregate mutation engine."""
    return AggregateMutationEngine(get_uow_factory())


@lru_cache
def get_post_service() -> PostService:
    """Get Post service instance."""
    return PostService(get_uow_factory(), engine=get_mutation_engine())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), engine=get_mutation_engine())
