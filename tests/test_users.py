"""User and category tests against PostgreSQL."""

import pytest

from cookbook.errors import ConflictError, NotFoundError
from cookbook.schemas.user import UserCreate


def test_add_and_get_user(user_service):
    user_id = user_service.add_user(
        UserCreate(username="alice", email="alice@example.com", hashed_password="hash")
    )

    by_name = user_service.get_user("alice")
    by_email = user_service.get_user("nobody", "alice@example.com")
    assert by_name.id == user_id
    assert by_email.id == user_id
    assert by_name.email == "alice@example.com"
    assert by_name.hashed_password == "hash"


def test_duplicate_username_is_conflict(user_service):
    user_service.add_user(UserCreate(username="bob", email="bob@example.com", hashed_password="x"))

    with pytest.raises(ConflictError):
        user_service.add_user(
            UserCreate(username="bob", email="other@example.com", hashed_password="x")
        )


def test_duplicate_email_is_conflict(user_service):
    user_service.add_user(UserCreate(username="carol", email="carol@example.com", hashed_password="x"))

    with pytest.raises(ConflictError):
        user_service.add_user(
            UserCreate(username="caroline", email="carol@example.com", hashed_password="x")
        )

    # The session is usable again after the rollback
    assert user_service.get_user("carol").username == "carol"


def test_get_missing_user(user_service):
    with pytest.raises(NotFoundError):
        user_service.get_user("ghost")


def test_get_categories(user_service, recipe_service, user_id, recipe_factory):
    recipe_service.add_recipe(user_id, recipe_factory("Soup", category="lunch"))
    recipe_service.add_recipe(user_id, recipe_factory("Cake", category="dessert"))
    recipe_service.add_recipe(user_id, recipe_factory("Salad", category="lunch"))

    assert user_service.get_categories() == ["dessert", "lunch"]
