"""SQLAlchemy implementation of Profile repository."""

from dataclasses import asdict
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentModificationError
from domain.entities.profile import Education, Experience, Profile, SocialLinks
from infrastructure.database.errors import translate_errors
from infrastructure.database.models import ProfileModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        with translate_errors("profiles.get"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        with translate_errors("profiles.get_by_user"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get all profiles."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        with translate_errors("profiles.get_all"):
            result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a profile; a second profile for the same user is a conflict."""
        model = self._to_model(profile)
        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as exc:
            raise ConcurrentModificationError("profile", str(profile.user_id)) from exc
        with translate_errors("profiles.create"):
            await self._session.refresh(model)
        return self._to_entity(model)

    async def replace(self, profile: Profile) -> Profile:
        """Write the whole profile back if nobody replaced it since it was read."""
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == profile.id, ProfileModel.version == profile.version)
            .values(**self._document(profile), version=ProfileModel.version + 1)
            .execution_options(synchronize_session=False)
        )
        with translate_errors("profiles.replace"):
            result = await self._session.execute(stmt)

        if result.rowcount == 0:
            raise ConcurrentModificationError("profile", str(profile.id))

        profile.version += 1
        return profile

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        stmt = delete(ProfileModel).where(ProfileModel.id == id)
        with translate_errors("profiles.delete"):
            result = await self._session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    def _experience_to_doc(entry: Experience) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from_date": entry.from_date.isoformat(),
            "to_date": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_to_doc(entry: Education) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "field_of_study": entry.field_of_study,
            "from_date": entry.from_date.isoformat(),
            "to_date": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_doc(doc: dict[str, Any]) -> Experience:
        return Experience(
            id=UUID(doc["id"]),
            title=doc["title"],
            company=doc["company"],
            location=doc.get("location"),
            from_date=date.fromisoformat(doc["from_date"]),
            to_date=_date_or_none(doc.get("to_date")),
            current=bool(doc.get("current", False)),
            description=doc.get("description"),
        )

    @staticmethod
    def _education_from_doc(doc: dict[str, Any]) -> Education:
        return Education(
            id=UUID(doc["id"]),
            school=doc["school"],
            degree=doc["degree"],
            field_of_study=doc["field_of_study"],
            from_date=date.fromisoformat(doc["from_date"]),
            to_date=_date_or_none(doc.get("to_date")),
            current=bool(doc.get("current", False)),
            description=doc.get("description"),
        )

    def _document(self, entity: Profile) -> dict[str, Any]:
        """Column values of the whole profile document."""
        return {
            "company": entity.company,
            "website": entity.website,
            "location": entity.location,
            "status": entity.status,
            "bio": entity.bio,
            "github_username": entity.github_username,
            "skills": list(entity.skills),
            "social": {k: v for k, v in asdict(entity.social).items() if v},
            "experience": [self._experience_to_doc(e) for e in entity.experience],
            "education": [self._education_to_doc(e) for e in entity.education],
            "updated_at": entity.updated_at,
        }

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            status=model.status,
            bio=model.bio,
            github_username=model.github_username,
            skills=list(model.skills or []),
            social=SocialLinks(**(model.social or {})),
            experience=[self._experience_from_doc(doc) for doc in model.experience or []],
            education=[self._education_from_doc(doc) for doc in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            created_at=entity.created_at,
            version=entity.version,
            **self._document(entity),
        )
