"""SQLAlchemy implementation of User repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.user import User
from infrastructure.database.errors import translate_errors
from infrastructure.database.models import UserModel


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        stmt = select(UserModel).where(UserModel.id == id)
        with translate_errors("users.get"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        """Create a new user.

        IntegrityError is left to the caller, which re-reads the id to tell a
        provisioning race from a real conflict.
        """
        model = UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            created_at=user.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a user."""
        stmt = delete(UserModel).where(UserModel.id == id)
        with translate_errors("users.delete"):
            result = await self._session.execute(stmt)
        return bool(result.rowcount)

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            avatar=model.avatar,
            created_at=model.created_at,
        )
