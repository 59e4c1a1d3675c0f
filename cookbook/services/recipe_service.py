"""Recipe service: fetch, paginate, insert, update and delete recipes."""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.orm import Session

from cookbook.errors import NotFoundError
from cookbook.schemas.recipe import (
    Nutrition,
    RecipeCreate,
    RecipePage,
    RecipeRecord,
    RecipeUpdate,
    Times,
)
from cookbook.services.unit_of_work import unit_of_work
from cookbook.statements import (
    COUNT_RECIPES,
    DELETE_RECIPE,
    DELETE_RECIPE_LINKS,
    GET_RECIPE,
    GET_RECIPES,
    LOCK_RECIPE,
    NUTRITION_FIELDS,
    insert_recipe_statement,
    reset_id_statement,
    update_recipe_statement,
)

logger = logging.getLogger(__name__)


def row_to_record(row: Any) -> RecipeRecord:
    """Build a RecipeRecord from a denormalized recipe row."""
    m = row._mapping
    return RecipeRecord(
        id=m["id"],
        name=m["name"],
        description=m["description"],
        url=m["url"],
        image=m["image"],
        yields=m["yields"],
        created_at=m["created_at"],
        updated_at=m["updated_at"],
        category=m["category"],
        nutrition=Nutrition(**{name: m[name] for name in NUTRITION_FIELDS}),
        times=Times(prep=m["prep"], cook=m["cook"], total=m["total"]),
        ingredients=list(m["ingredients"] or []),
        instructions=list(m["instructions"] or []),
        keywords=list(m["keywords"] or []),
        tools=list(m["tools"] or []),
    )


class RecipeService:
    """Service for recipe persistence."""

    def __init__(self, db: Session):
        self.db = db

    def get_recipe(self, recipe_id: int) -> RecipeRecord:
        """Fetch one recipe with its child collections."""
        with unit_of_work(self.db, "get recipe"):
            row = self.db.execute(text(GET_RECIPE), {"p1": recipe_id}).first()
            if row is None:
                raise NotFoundError(f"Recipe {recipe_id} not found")
        return row_to_record(row)

    def get_recipes(self, user_id: int, cursor: int = 0) -> RecipePage:
        """Fetch the page of a user's recipes that follows row number ``cursor``.

        Pass 0 for the first page and ``next_cursor`` of the previous page
        afterwards. An empty page keeps the cursor unchanged.
        """
        with unit_of_work(self.db, "get recipes"):
            rows = self.db.execute(text(GET_RECIPES), {"p1": user_id, "p2": cursor}).all()

        recipes = [row_to_record(row) for row in rows]
        next_cursor = rows[-1]._mapping["rowid"] if rows else cursor
        return RecipePage(recipes=recipes, next_cursor=next_cursor)

    def count_recipes(self, user_id: int) -> int:
        """Number of recipes owned by a user."""
        with unit_of_work(self.db, "count recipes"):
            return self.db.execute(text(COUNT_RECIPES), {"p1": user_id}).scalar_one()

    def add_recipe(self, user_id: int, recipe: RecipeCreate) -> int:
        """Insert a recipe owned by ``user_id`` and return its id."""
        stmt = insert_recipe_statement(user_id, recipe)
        logger.debug(f"Insert statement for '{recipe.name}' binds {len(stmt.params)} parameters")

        with unit_of_work(self.db, "insert recipe"):
            recipe_id = self.db.execute(text(stmt.sql), stmt.bind()).scalar_one()

        logger.info(f"Created recipe {recipe_id} '{recipe.name}' for user {user_id}")
        return recipe_id

    def update_recipe(self, recipe: RecipeUpdate) -> None:
        """Replace a recipe's fields and child lists.

        Links to ingredients, instructions, keywords and tools are cleared and
        rebuilt from the given lists; lookup rows are never deleted.
        """
        stmt = update_recipe_statement(recipe)
        logger.debug(f"Update statement for recipe {recipe.id} binds {len(stmt.params)} parameters")

        with unit_of_work(self.db, "update recipe"):
            found = self.db.execute(text(LOCK_RECIPE), {"p1": recipe.id}).first()
            if found is None:
                raise NotFoundError(f"Recipe {recipe.id} not found")
            self.db.execute(text(DELETE_RECIPE_LINKS), {"p1": recipe.id})
            self.db.execute(text(stmt.sql), stmt.bind())

        logger.info(f"Updated recipe {recipe.id}")

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe; its links and satellites cascade."""
        with unit_of_work(self.db, "delete recipe"):
            deleted = self.db.execute(text(DELETE_RECIPE), {"p1": recipe_id}).first()
            if deleted is None:
                raise NotFoundError(f"Recipe {recipe_id} not found")

        logger.info(f"Deleted recipe {recipe_id}")

    def reset_id(self, table: str) -> None:
        """Resynchronise a table's id sequence, e.g. after a bulk import."""
        sql = reset_id_statement(table)
        with unit_of_work(self.db, f"reset {table} id sequence"):
            self.db.execute(text(sql))
