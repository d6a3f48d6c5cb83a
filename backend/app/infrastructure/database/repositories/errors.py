"""Translation of SQLAlchemy failures into domain exceptions."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.domain.exceptions import DuplicateEntityError, StorageUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(
    operation: str,
    *,
    conflict: DuplicateEntityError | None = None,
) -> Iterator[None]:
    """Re-raise record-store failures as domain exceptions.

    ``conflict`` is raised for unique-constraint violations when given;
    every other database error becomes StorageUnavailableError.
    """
    try:
        yield
    except IntegrityError as exc:
        if conflict is not None:
            raise conflict from exc
        logger.error("Integrity error during %s: %s", operation, exc)
        raise StorageUnavailableError(f"Record store rejected {operation}") from exc
    except SQLAlchemyError as exc:
        logger.error("Record store failure during %s: %s", operation, exc)
        raise StorageUnavailableError(f"Record store unavailable during {operation}") from exc
