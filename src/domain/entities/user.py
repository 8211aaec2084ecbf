"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """Account record behind an authenticated identity.

    The id is the token subject, so it is supplied rather than generated.
    """

    id: UUID
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
