"""Profile aggregate: member profile with experience and education entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4


@dataclass
class SocialLinks:
    """Optional social network URLs."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


@dataclass
class Experience:
    """Job entry on a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """School entry on a profile."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


# Scalar fields a create-or-update request may set
PROFILE_SCALAR_FIELDS = (
    "company",
    "website",
    "location",
    "status",
    "bio",
    "github_username",
)


@dataclass
class Profile:
    """Domain entity for a member profile.

    Exactly one profile exists per user. Experience and education entries
    have no owner of their own; they belong to ``user_id``.
    """

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str | None = None
    bio: str | None = None
    github_username: str | None = None
    skills: list[str] = field(default_factory=list)
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 0

    @property
    def owner_id(self) -> UUID:
        return self.user_id

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
