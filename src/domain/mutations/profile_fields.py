"""Scalar-field overwrite used by profile create-or-update."""

from collections.abc import Iterable, Mapping
from typing import Any

from domain.entities.profile import PROFILE_SCALAR_FIELDS, Profile, SocialLinks

SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def parse_skills(skills: str | Iterable[str]) -> list[str]:
    """Split a comma-separated skill string, trimming and dropping blanks."""
    raw = skills.split(",") if isinstance(skills, str) else skills
    return [skill.strip() for skill in raw if skill and skill.strip()]


def apply_profile_fields(profile: Profile, fields: Mapping[str, Any]) -> Profile:
    """Overwrite the profile fields present (and non-empty) in ``fields``.

    Absent or empty values leave the current value untouched, so an update
    never clears a field. Social links are given under their own names
    (``youtube``, ``twitter`` ...) or as a ``social`` mapping.
    """
    for name in PROFILE_SCALAR_FIELDS:
        value = fields.get(name)
        if value:
            setattr(profile, name, value)

    skills = fields.get("skills")
    if skills:
        profile.skills = parse_skills(skills)

    social: dict[str, Any] = dict(fields.get("social") or {})
    for name in SOCIAL_FIELDS:
        if fields.get(name):
            social[name] = fields[name]

    if social:
        current = profile.social or SocialLinks()
        for name in SOCIAL_FIELDS:
            if social.get(name):
                setattr(current, name, social[name])
        profile.social = current

    return profile
