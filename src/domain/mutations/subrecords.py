"""Experience and education entries of a profile.

Both kinds share the same add/remove rules and differ only in the attribute
they live in and their mandatory fields, so one ``ProfileSubcollection``
handles each kind.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID, uuid4

from core.exceptions import SubRecordNotFoundError, ValidationError
from domain.entities.profile import Education, Experience, Profile
from domain.mutations.sequence import find_by_id, prepend, remove_entry
from domain.services.authorization import require_owner

R = TypeVar("R", Experience, Education)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


@dataclass(frozen=True)
class ProfileSubcollection(Generic[R]):
    """Owner-checked add/remove over one embedded list of a profile."""

    kind: str
    attribute: str
    required_fields: tuple[str, ...]
    factory: Callable[..., R]

    def entries(self, profile: Profile) -> list[R]:
        return getattr(profile, self.attribute)  # type: ignore[no-any-return]

    def add(self, profile: Profile, user_id: UUID, fields: dict[str, Any]) -> list[R]:
        """Validate ``fields`` and insert a new entry at the front."""
        require_owner(user_id, profile.user_id)

        for name in self.required_fields:
            if _is_blank(fields.get(name)):
                raise ValidationError(name)

        entries = self.entries(profile)
        record_id = uuid4()
        while find_by_id(entries, record_id) is not None:
            record_id = uuid4()

        values = {key: value for key, value in fields.items() if key != "id"}
        prepend(entries, self.factory(id=record_id, **values))
        profile.updated_at = datetime.utcnow()
        return entries

    def remove(self, profile: Profile, record_id: UUID, user_id: UUID) -> R:
        """Remove the entry with ``record_id`` and return it."""
        require_owner(user_id, profile.user_id)

        entries = self.entries(profile)
        record = find_by_id(entries, record_id)
        if record is None:
            raise SubRecordNotFoundError(self.kind, str(record_id))

        remove_entry(entries, record)
        profile.updated_at = datetime.utcnow()
        return record


EXPERIENCE: ProfileSubcollection[Experience] = ProfileSubcollection(
    kind="experience",
    attribute="experience",
    required_fields=("title", "company", "from_date"),
    factory=Experience,
)

EDUCATION: ProfileSubcollection[Education] = ProfileSubcollection(
    kind="education",
    attribute="education",
    required_fields=("school", "degree", "field_of_study", "from_date"),
    factory=Education,
)
