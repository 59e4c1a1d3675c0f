"""Recipe schemas."""

from datetime import datetime, timedelta
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# --- Satellites ---


class Nutrition(BaseModel):
    """Nutrition facts of a recipe."""

    model_config = ConfigDict(from_attributes=True)

    calories: float | None = None
    total_carbohydrates: float | None = None
    sugars: float | None = None
    protein: float | None = None
    total_fat: float | None = None
    saturated_fat: float | None = None
    cholesterol: float | None = None
    sodium: float | None = None
    fiber: float | None = None


class Times(BaseModel):
    """Preparation and cooking durations."""

    prep: timedelta = timedelta(0)
    cook: timedelta = timedelta(0)
    total: timedelta | None = None


# --- Recipe ---


class RecipeCreate(BaseModel):
    """Create a new recipe."""

    name: str = Field(..., max_length=255)
    description: str | None = None
    url: str | None = None
    image: UUID | None = None  # None or the nil UUID means "no image"
    yields: int | None = None
    category: str = Field(..., max_length=1000)
    nutrition: Nutrition = Nutrition()
    times: Times = Times()
    ingredients: list[str] = []
    instructions: list[str] = []
    keywords: list[str] = []
    tools: list[str] = []


class RecipeUpdate(RecipeCreate):
    """Replace an existing recipe. Child lists are replaced, not merged."""

    id: int


class RecipeRecord(BaseModel):
    """Denormalized recipe row as read back from the database."""

    id: int
    name: str
    description: str | None
    url: str | None
    image: UUID
    yields: int | None
    created_at: datetime
    updated_at: datetime
    category: str
    nutrition: Nutrition
    times: Times
    ingredients: list[str]
    instructions: list[str]
    keywords: list[str]
    tools: list[str]


class RecipePage(BaseModel):
    """One page of a user's recipes."""

    recipes: list[RecipeRecord]
    # Row number of the last recipe; pass it back to fetch the next page
    next_cursor: int
