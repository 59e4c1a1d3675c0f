"""Tests for database error translation and the unit of work."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from cookbook.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    is_unique_violation,
    translate_db_error,
)
from cookbook.services.unit_of_work import unit_of_work


class FakeDriverError(Exception):
    """Stands in for a psycopg2 error carrying a SQLSTATE."""

    def __init__(self, pgcode):
        super().__init__(f"SQLSTATE {pgcode}")
        self.pgcode = pgcode


def integrity_error(pgcode: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, FakeDriverError(pgcode))


def test_unique_violation_is_conflict():
    error = integrity_error("23505")

    assert is_unique_violation(error)
    assert isinstance(translate_db_error(error), ConflictError)


def test_foreign_key_violation_is_persistence_failure():
    error = integrity_error("23503")

    assert not is_unique_violation(error)
    assert isinstance(translate_db_error(error), PersistenceError)


def test_operational_error_is_persistence_failure():
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))

    assert isinstance(translate_db_error(error), PersistenceError)


def test_unit_of_work_commits_on_success():
    session = MagicMock()

    with unit_of_work(session, "test"):
        pass

    session.commit.assert_called_once()
    session.rollback.assert_not_called()


def test_unit_of_work_translates_conflict():
    session = MagicMock()

    with pytest.raises(ConflictError) as exc_info:
        with unit_of_work(session, "insert user"):
            raise integrity_error("23505")

    assert isinstance(exc_info.value.__cause__, IntegrityError)
    session.rollback.assert_called_once()
    session.commit.assert_not_called()


def test_unit_of_work_translates_other_errors():
    session = MagicMock()

    with pytest.raises(PersistenceError):
        with unit_of_work(session, "insert recipe"):
            raise integrity_error("22007")

    session.rollback.assert_called_once()


def test_unit_of_work_passes_through_repository_errors():
    session = MagicMock()

    with pytest.raises(NotFoundError):
        with unit_of_work(session, "get recipe"):
            raise NotFoundError("Recipe 1 not found")

    session.rollback.assert_called_once()
    session.commit.assert_not_called()


def test_unit_of_work_wraps_driver_errors():
    session = MagicMock()

    with pytest.raises(PersistenceError) as exc_info:
        with unit_of_work(session, "insert recipe"):
            raise ValueError("A string literal cannot contain NUL (0x00) characters.")

    assert isinstance(exc_info.value.__cause__, ValueError)
    session.rollback.assert_called_once()
    session.commit.assert_not_called()
