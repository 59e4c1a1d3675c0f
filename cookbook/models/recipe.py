"""Recipe model and its one-to-one satellites."""

from sqlalchemy import (
    Column,
    Computed,
    Float,
    ForeignKey,
    Integer,
    Interval,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from cookbook.constants import NIL_UUID
from cookbook.database import Base
from cookbook.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe row. Child collections live in the association tables."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(Text, nullable=True)
    # Image blob id; the nil UUID means "no image"
    image = Column(UUID(as_uuid=True), nullable=False, server_default=text(f"'{NIL_UUID}'::uuid"))
    yields = Column("yield", Integer, nullable=True)


class Nutrition(Base):
    """Nutrition facts, one row per recipe."""

    __tablename__ = "nutrition"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    calories = Column(Float, nullable=True)
    total_carbohydrates = Column(Float, nullable=True)
    sugars = Column(Float, nullable=True)
    protein = Column(Float, nullable=True)
    total_fat = Column(Float, nullable=True)
    saturated_fat = Column(Float, nullable=True)
    cholesterol = Column(Float, nullable=True)
    sodium = Column(Float, nullable=True)
    fiber = Column(Float, nullable=True)


class Times(Base):
    """Preparation and cooking durations, shared by every recipe with the same pair."""

    __tablename__ = "times"
    __table_args__ = (UniqueConstraint("prep", "cook", name="times_prep_cook_key"),)

    id = Column(Integer, primary_key=True, index=True)
    prep = Column(Interval, nullable=False)
    cook = Column(Interval, nullable=False)
    total = Column(Interval, Computed("prep + cook", persisted=True))


class TimeRecipe(Base):
    __tablename__ = "time_recipe"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    time_id = Column(Integer, ForeignKey("times.id"), nullable=False, index=True)
