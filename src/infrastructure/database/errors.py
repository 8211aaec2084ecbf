"""Translation of driver errors into RepositoryError."""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import RepositoryError

logger = structlog.get_logger()


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures inside the block as RepositoryError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(
            "repository_error",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise RepositoryError(operation) from exc
