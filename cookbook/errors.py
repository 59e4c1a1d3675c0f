"""Error kinds raised by the repository layer."""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

UNIQUE_VIOLATION = "23505"


class CookbookError(Exception):
    """Base class for repository errors."""


class NotFoundError(CookbookError):
    """The requested recipe or user does not exist."""


class ConflictError(CookbookError):
    """A unique constraint (name, username, email, id) was violated."""


class PersistenceError(CookbookError):
    """Any other database failure."""


def is_unique_violation(exc: SQLAlchemyError) -> bool:
    """Check whether the driver reported SQLSTATE 23505."""
    if not isinstance(exc, IntegrityError):
        return False
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return code == UNIQUE_VIOLATION


def translate_db_error(exc: SQLAlchemyError) -> CookbookError:
    """Map a SQLAlchemy exception onto a repository error kind."""
    if is_unique_violation(exc):
        return ConflictError(str(getattr(exc, "orig", exc)))
    return PersistenceError(str(getattr(exc, "orig", exc)))
