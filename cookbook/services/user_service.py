"""User and category lookups."""

import logging

from sqlalchemy import text
from sqlalchemy.orm import Session

from cookbook.errors import NotFoundError
from cookbook.schemas.user import UserCreate, UserRecord
from cookbook.services.unit_of_work import unit_of_work
from cookbook.statements import GET_CATEGORIES, GET_USER, INSERT_USER

logger = logging.getLogger(__name__)


class UserService:
    """Service for users and the categories they can pick from."""

    def __init__(self, db: Session):
        self.db = db

    def add_user(self, user: UserCreate) -> int:
        """Insert a user; a taken username or email raises ConflictError."""
        with unit_of_work(self.db, "insert user"):
            user_id = self.db.execute(
                text(INSERT_USER),
                {"p1": user.username, "p2": user.email, "p3": user.hashed_password},
            ).scalar_one()

        logger.info(f"Created user {user_id} '{user.username}'")
        return user_id

    def get_user(self, username: str, email: str | None = None) -> UserRecord:
        """Find a user by username or email."""
        with unit_of_work(self.db, "get user"):
            row = self.db.execute(
                text(GET_USER), {"p1": username, "p2": email if email is not None else username}
            ).first()
            if row is None:
                raise NotFoundError(f"User '{username}' not found")
        return UserRecord.model_validate(dict(row._mapping))

    def get_categories(self) -> list[str]:
        """All category names, alphabetically."""
        with unit_of_work(self.db, "get categories"):
            return list(self.db.execute(text(GET_CATEGORIES)).scalars().all())
