"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for the Profile aggregate."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get all profiles."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile.

        Raises ConcurrentModificationError if the user already has one.
        """
        ...

    async def replace(self, profile: Profile) -> Profile:
        """Overwrite the whole stored profile (version-checked)."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return success status."""
        ...
