"""Pytest configuration and fixtures."""

import os
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from cookbook import models  # noqa: F401
from cookbook.database import Base
from cookbook.schemas.recipe import Nutrition, RecipeCreate, Times
from cookbook.schemas.user import UserCreate
from cookbook.services.recipe_service import RecipeService
from cookbook.services.user_service import UserService

# The statements use PostgreSQL-only syntax, so database tests need a
# PostgreSQL server. Without one they are skipped and only the pure
# statement-building tests run.
_database_url = os.getenv("DATABASE_URL", "")
if _database_url.startswith("postgresql"):
    _url = make_url(_database_url)
    SQLALCHEMY_DATABASE_URL = _url.set(database=f"{_url.database}_test")
else:
    SQLALCHEMY_DATABASE_URL = None


@pytest.fixture(scope="session")
def engine():
    """Create the test database and schema once per session."""
    if SQLALCHEMY_DATABASE_URL is None:
        pytest.skip("DATABASE_URL does not point at PostgreSQL")

    from sqlalchemy_utils import create_database, database_exists

    if not database_exists(SQLALCHEMY_DATABASE_URL):
        create_database(SQLALCHEMY_DATABASE_URL)

    test_engine = create_engine(SQLALCHEMY_DATABASE_URL)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    """Create a fresh database session for each test with cleanup."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def recipe_service(db):
    return RecipeService(db)


@pytest.fixture
def user_service(db):
    return UserService(db)


@pytest.fixture
def user_id(user_service):
    """Create a user and return its id."""
    return user_service.add_user(
        UserCreate(username="cook", email="cook@example.com", hashed_password="hashed")
    )


def make_recipe(name: str = "Pasta Carbonara", **overrides) -> RecipeCreate:
    """Build a complete recipe, overriding any field."""
    fields = {
        "name": name,
        "description": "Classic Italian pasta",
        "url": "https://example.com/carbonara",
        "yields": 4,
        "category": "dinner",
        "nutrition": Nutrition(calories=650, protein=25.5, fiber=2),
        "times": Times(prep=timedelta(minutes=10), cook=timedelta(minutes=15)),
        "ingredients": ["spaghetti", "eggs", "parmesan"],
        "instructions": ["Boil pasta", "Mix eggs and cheese", "Combine"],
        "keywords": ["italian"],
        "tools": ["pot"],
    }
    fields.update(overrides)
    return RecipeCreate(**fields)


@pytest.fixture
def recipe_factory():
    return make_recipe
