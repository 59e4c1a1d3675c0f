"""Pydantic schemas for repository inputs and outputs."""

from cookbook.schemas.recipe import (
    Nutrition,
    RecipeCreate,
    RecipePage,
    RecipeRecord,
    RecipeUpdate,
    Times,
)
from cookbook.schemas.user import UserCreate, UserRecord

__all__ = [
    "Nutrition",
    "Times",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeRecord",
    "RecipePage",
    "UserCreate",
    "UserRecord",
]
