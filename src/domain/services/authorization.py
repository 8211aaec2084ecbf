"""Ownership checks for owner-scoped mutations."""

from enum import StrEnum
from uuid import UUID

from core.exceptions import AuthorizationError


class AccessDecision(StrEnum):
    """Outcome of an ownership check."""

    ALLOW = "allow"
    DENY = "deny"


def check_access(caller_id: UUID, owner_id: UUID) -> AccessDecision:
    """Allow only when the caller is the designated owner."""
    return AccessDecision.ALLOW if caller_id == owner_id else AccessDecision.DENY


def require_owner(
    caller_id: UUID, owner_id: UUID, message: str = "User not authorized"
) -> None:
    """Raise AuthorizationError unless the caller owns the resource."""
    if check_access(caller_id, owner_id) is AccessDecision.DENY:
        raise AuthorizationError(message)
