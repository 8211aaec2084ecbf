"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    POST_NOT_FOUND = "POST_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    ALREADY_LIKED = "ALREADY_LIKED"
    NOT_LIKED = "NOT_LIKED"

    # Conflict errors (409)
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    PARTIAL_CASCADE_FAILURE = "PARTIAL_CASCADE_FAILURE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Caller is not the owner required by an owner-scoped operation."""

    def __init__(self, message: str = "User not authorized") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, key: str, field: str = "profile_id") -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {key}",
            status_code=404,
            details={field: key},
        )


class UserNotFoundError(AppException):
    """User record not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class CommentNotFoundError(AppException):
    """Comment does not exist on the post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message=f"Comment does not exist: {comment_id}",
            status_code=404,
            details={"comment_id": comment_id},
        )


class SubRecordNotFoundError(AppException):
    """Experience or education entry does not exist on the profile."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(
            error_code=ErrorCode(f"{kind.upper()}_NOT_FOUND"),
            message=f"{kind.capitalize()} entry not found: {record_id}",
            status_code=404,
            details={"kind": kind, "record_id": record_id},
        )


class AlreadyLikedError(AppException):
    """Post already carries a like from the caller."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_LIKED,
            message="Post already liked",
            status_code=400,
            details={"post_id": post_id},
        )


class NotLikedError(AppException):
    """Post carries no like from the caller."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_LIKED,
            message="Post has not yet been liked",
            status_code=400,
            details={"post_id": post_id},
        )


class ValidationError(AppException):
    """A required field is missing or empty."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message or f"{field} is required",
            status_code=400,
            details={"field": field},
        )


class ConcurrentModificationError(AppException):
    """The stored aggregate changed between read and replace."""

    def __init__(self, kind: str, aggregate_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            message=f"{kind.capitalize()} was modified concurrently, retry the request",
            status_code=409,
            details={"kind": kind, "id": aggregate_id},
        )


class RepositoryError(AppException):
    """The storage layer failed to read or write."""

    def __init__(self, operation: str, message: str = "Persistence failure") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=500,
            details={"operation": operation},
        )


class PartialCascadeFailureError(AppException):
    """An account cascade step failed after an earlier step succeeded."""

    def __init__(
        self,
        completed: list[str],
        failed: str,
        rolled_back: bool,
    ) -> None:
        super().__init__(
            error_code=ErrorCode.PARTIAL_CASCADE_FAILURE,
            message=f"Account deletion failed at step '{failed}'",
            status_code=500,
            details={
                "completed": completed,
                "failed": failed,
                "rolled_back": rolled_back,
            },
        )
