"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Caller identity decoded from a verified bearer token."""

    id: UUID
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the caller identity, or None if the token is not valid."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Issue a token for a user."""
        ...
