"""SQLAlchemy models."""

from cookbook.models.lookup import (
    Category,
    CategoryRecipe,
    Ingredient,
    IngredientRecipe,
    Instruction,
    InstructionRecipe,
    Keyword,
    KeywordRecipe,
    Tool,
    ToolRecipe,
)
from cookbook.models.recipe import NIL_UUID, Nutrition, Recipe, TimeRecipe, Times
from cookbook.models.user import User, UserRecipe

__all__ = [
    "NIL_UUID",
    "Recipe",
    "Nutrition",
    "Times",
    "TimeRecipe",
    "Category",
    "CategoryRecipe",
    "Ingredient",
    "IngredientRecipe",
    "Instruction",
    "InstructionRecipe",
    "Keyword",
    "KeywordRecipe",
    "Tool",
    "ToolRecipe",
    "User",
    "UserRecipe",
]
