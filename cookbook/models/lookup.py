"""Shared name-keyed lookup tables and their recipe association tables."""

from sqlalchemy import Column, ForeignKey, Integer

from cookbook.database import Base
from cookbook.models.mixins import NameMixin


class Category(Base, NameMixin):
    """Recipe category, e.g. "dessert"."""

    __tablename__ = "categories"


class Ingredient(Base, NameMixin):
    """Ingredient line, shared by every recipe that uses the same text."""

    __tablename__ = "ingredients"


class Instruction(Base, NameMixin):
    """Instruction step."""

    __tablename__ = "instructions"


class Keyword(Base, NameMixin):
    """Search keyword."""

    __tablename__ = "keywords"


class Tool(Base, NameMixin):
    """Kitchen tool."""

    __tablename__ = "tools"


class CategoryRecipe(Base):
    """Links a recipe to its single category."""

    __tablename__ = "category_recipe"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)


class IngredientRecipe(Base):
    __tablename__ = "ingredient_recipe"

    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)


class InstructionRecipe(Base):
    __tablename__ = "instruction_recipe"

    instruction_id = Column(Integer, ForeignKey("instructions.id"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)


class KeywordRecipe(Base):
    __tablename__ = "keyword_recipe"

    keyword_id = Column(Integer, ForeignKey("keywords.id"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)


class ToolRecipe(Base):
    __tablename__ = "tool_recipe"

    tool_id = Column(Integer, ForeignKey("tools.id"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
