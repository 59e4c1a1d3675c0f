"""Commit-or-rollback wrapper shared by the services."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cookbook.errors import ConflictError, CookbookError, PersistenceError, translate_db_error

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session, action: str) -> Iterator[Session]:
    """Commit on success; roll back and raise a repository error otherwise.

    ``action`` describes the operation for log messages, e.g. "insert recipe".
    """
    try:
        yield db
        db.commit()
    except CookbookError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        error = translate_db_error(e)
        if isinstance(error, ConflictError):
            logger.warning(f"Conflict during {action}: {error}")
        else:
            logger.error(f"Failed to {action}: {error}")
        raise error from e
    except Exception as e:
        # Driver-side rejections (e.g. NUL in a string) are raised before
        # SQLAlchemy wraps them
        db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise PersistenceError(str(e)) from e
