"""SQL statements for recipes, users and categories.

Every placeholder is rendered as a ``:pN`` bind where ``N`` is its 1-based
position in the parameter list, so a built ``Statement`` can run through
SQLAlchemy's ``text()``. Casts are written as ``CAST(:pN AS type)`` because
``text()`` does not treat ``:pN::type`` as a bind.

Insert and update statements are single CTE chains. Positions 1-18 hold the
fixed fields (acting user id or recipe id, recipe columns, category,
nutrition, times); the names of the four child lists follow from position 19.
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from cookbook.constants import NIL_UUID
from cookbook.schemas.recipe import RecipeCreate, RecipeUpdate

PAGE_SIZE = 12
NAME_PARAMS_OFFSET = 19

NUTRITION_FIELDS = (
    "calories",
    "total_carbohydrates",
    "sugars",
    "protein",
    "total_fat",
    "saturated_fat",
    "cholesterol",
    "sodium",
    "fiber",
)

# Tables whose id sequence may be resynchronised with reset_id_statement()
SEQUENCE_TABLES = frozenset(
    {
        "recipes",
        "categories",
        "ingredients",
        "instructions",
        "keywords",
        "tools",
        "nutrition",
        "times",
        "users",
    }
)


def param(position: int) -> str:
    """Placeholder token for a 1-based parameter position."""
    return f":p{position}"


@dataclass
class Statement:
    """SQL text plus its ordered positional parameters."""

    sql: str
    params: list[Any] = field(default_factory=list)

    def bind(self) -> dict[str, Any]:
        """Parameters keyed by bind name, as expected by ``text()``."""
        return {f"p{i}": value for i, value in enumerate(self.params, start=1)}


@dataclass
class NameTable:
    """A shared lookup table, its association table and the names to link."""

    table: str
    assoc_table: str
    entries: list[str]

    @property
    def column(self) -> str:
        """Singular entity name, e.g. ``ingredient`` for ``ingredient_recipe``."""
        return self.assoc_table.split("_", 1)[0]


def recipe_name_tables(recipe: RecipeCreate) -> list[NameTable]:
    """The four child lists of a recipe, in placeholder order."""
    return [
        NameTable("ingredients", "ingredient_recipe", recipe.ingredients),
        NameTable("instructions", "instruction_recipe", recipe.instructions),
        NameTable("keywords", "keyword_recipe", recipe.keywords),
        NameTable("tools", "tool_recipe", recipe.tools),
    ]


class NameParams:
    """Placeholder bookkeeping for the variable-length name lists.

    Assigns one placeholder per distinct name of every non-empty table,
    starting at ``offset`` and following table order. The placeholder map is
    keyed by ``(table, name)`` so the relink stage reuses the token bound in
    the insert stage.
    """

    def __init__(self, tables: list[NameTable], offset: int = NAME_PARAMS_OFFSET):
        self.offset = offset
        self.next_position = offset
        self.tables: list[NameTable] = []
        self.placeholders: dict[tuple[str, str], str] = {}
        self.values: list[str] = []

        for table in tables:
            entries = list(dict.fromkeys(table.entries))
            if not entries:
                continue
            self.tables.append(NameTable(table.table, table.assoc_table, entries))
            for name in entries:
                self.placeholders[(table.table, name)] = param(self.next_position)
                self.values.append(name)
                self.next_position += 1

    def placeholder(self, table: str, name: str) -> str:
        return self.placeholders[(table, name)]

    def insert_stmt(self, table: NameTable) -> str:
        """Insert-if-new stage: a no-op for names that already exist."""
        rows = ", ".join(f"({self.placeholder(table.table, name)})" for name in table.entries)
        return f""", ins_{table.table} AS (
            INSERT INTO {table.table} (name)
            VALUES {rows}
            ON CONFLICT ON CONSTRAINT {table.table}_name_key DO UPDATE
            SET name = NULL
            WHERE FALSE
            RETURNING id, name
        )"""

    def assoc_stmt(self, table: NameTable, recipe_id: str) -> str:
        """Relink stage: resolve each name to exactly one id and link it to the recipe."""
        values = []
        for name in table.entries:
            where = f"WHERE name = {self.placeholder(table.table, name)}"
            values.append(
                f"""
            (
                (
                    SELECT id FROM ins_{table.table} {where}
                    UNION ALL
                    SELECT id FROM {table.table} {where}
                ),
                {recipe_id}
            )"""
            )
        rows = ",".join(values)
        return f""", ins_{table.column}_recipe AS (
            INSERT INTO {table.assoc_table} ({table.column}_id, recipe_id)
            VALUES{rows}
        )"""

    def statements(self, recipe_id: str) -> str:
        """All CTE fragments, in table order, each insert stage before its relink stage."""
        fragments = []
        for table in self.tables:
            fragments.append(self.insert_stmt(table))
            fragments.append(self.assoc_stmt(table, recipe_id))
        return "".join(fragments)


def _image_param(image: UUID | None) -> str | None:
    return str(image) if image is not None else None


def recipe_params(head: int, recipe: RecipeCreate) -> list[Any]:
    """Fixed parameters 1-18; ``head`` is the user id on insert and the recipe id on update."""
    return [
        head,
        recipe.name,
        recipe.description,
        _image_param(recipe.image),
        recipe.url,
        recipe.yields,
        recipe.category,
        *(getattr(recipe.nutrition, name) for name in NUTRITION_FIELDS),
        recipe.times.prep,
        recipe.times.cook,
    ]


# SELECT

_RECIPE_COLUMNS = """
        r.id,
        r.name,
        r.description,
        r.url,
        r.image,
        r.yield AS yields,
        r.created_at,
        r.updated_at,
        c.name AS category,
        n.calories,
        n.total_carbohydrates,
        n.sugars,
        n.protein,
        n.total_fat,
        n.saturated_fat,
        n.cholesterol,
        n.sodium,
        n.fiber,
        ARRAY(
            SELECT i.name
            FROM ingredients i
            JOIN ingredient_recipe ir ON ir.ingredient_id = i.id
            WHERE ir.recipe_id = r.id
        ) AS ingredients,
        ARRAY(
            SELECT i2.name
            FROM instructions i2
            JOIN instruction_recipe ir2 ON ir2.instruction_id = i2.id
            WHERE ir2.recipe_id = r.id
        ) AS instructions,
        ARRAY(
            SELECT k.name
            FROM keywords k
            JOIN keyword_recipe kr ON kr.keyword_id = k.id
            WHERE kr.recipe_id = r.id
        ) AS keywords,
        ARRAY(
            SELECT t.name
            FROM tools t
            JOIN tool_recipe tr ON tr.tool_id = t.id
            WHERE tr.recipe_id = r.id
        ) AS tools,
        t2.prep,
        t2.cook,
        t2.total"""

_RECIPE_JOINS = """
    FROM recipes r
    JOIN category_recipe cr ON cr.recipe_id = r.id
    JOIN categories c ON c.id = cr.category_id
    JOIN nutrition n ON n.recipe_id = r.id
    JOIN time_recipe tr2 ON tr2.recipe_id = r.id
    JOIN times t2 ON t2.id = tr2.time_id"""

GET_RECIPE = f"""
    SELECT {_RECIPE_COLUMNS}
    {_RECIPE_JOINS}
    WHERE r.id = :p1"""

GET_RECIPES = f"""
    WITH numbered AS (
        SELECT
            ROW_NUMBER() OVER (ORDER BY r.id) AS rowid,
            {_RECIPE_COLUMNS}
        {_RECIPE_JOINS}
        JOIN user_recipe ur ON ur.recipe_id = r.id
        WHERE ur.user_id = :p1
    )
    SELECT *
    FROM numbered
    WHERE rowid > :p2
    ORDER BY id ASC
    LIMIT {PAGE_SIZE}"""

COUNT_RECIPES = """
    SELECT COUNT(*)
    FROM user_recipe
    WHERE user_id = :p1"""

LOCK_RECIPE = """
    SELECT id
    FROM recipes
    WHERE id = :p1
    FOR UPDATE"""

GET_USER = """
    SELECT id, username, email, hashed_password
    FROM users
    WHERE username = :p1 OR email = :p2"""

GET_CATEGORIES = """
    SELECT name
    FROM categories
    ORDER BY name"""


def reset_id_statement(table: str) -> str:
    """Move a table's id sequence to its current maximum id."""
    if table not in SEQUENCE_TABLES:
        raise ValueError(f"Unknown table: {table}")
    return f"SELECT setval('{table}_id_seq', MAX(id)) FROM {table}"


# INSERT


def insert_recipe_statement(user_id: int, recipe: RecipeCreate) -> Statement:
    """Insert a recipe with its satellites and child lists; returns the new id."""
    names = NameParams(recipe_name_tables(recipe))

    sql = (
        f"""
        WITH ins_recipe AS (
            INSERT INTO recipes (name, description, image, url, yield)
            VALUES (:p2, :p3, COALESCE(CAST(:p4 AS uuid), CAST('{NIL_UUID}' AS uuid)), :p5, :p6)
            RETURNING id
        ), ins_category AS (
            INSERT INTO categories (name)
            VALUES (:p7)
            ON CONFLICT ON CONSTRAINT categories_name_key DO UPDATE
            SET name = NULL
            WHERE FALSE
            RETURNING id, name
        ), ins_category_recipe AS (
            INSERT INTO category_recipe (recipe_id, category_id)
            VALUES (
                (SELECT id FROM ins_recipe),
                (
                    SELECT id FROM ins_category
                    UNION ALL
                    SELECT id FROM categories WHERE name = :p7
                )
            )
        ), ins_nutrition AS (
            INSERT INTO nutrition (
                recipe_id, calories, total_carbohydrates, sugars,
                protein, total_fat, saturated_fat, cholesterol, sodium, fiber
            )
            VALUES ((SELECT id FROM ins_recipe), :p8, :p9, :p10, :p11, :p12, :p13, :p14, :p15, :p16)
            RETURNING id
        ), ins_times AS (
            INSERT INTO times (prep, cook)
            VALUES (CAST(:p17 AS interval), CAST(:p18 AS interval))
            ON CONFLICT ON CONSTRAINT times_prep_cook_key DO UPDATE
            SET prep = NULL
            WHERE FALSE
            RETURNING id
        ), ins_time_recipe AS (
            INSERT INTO time_recipe (time_id, recipe_id)
            VALUES (
                (
                    SELECT id FROM ins_times
                    UNION ALL
                    SELECT id FROM times
                    WHERE prep = CAST(:p17 AS interval) AND cook = CAST(:p18 AS interval)
                ),
                (SELECT id FROM ins_recipe)
            )
        ), ins_user_recipe AS (
            INSERT INTO user_recipe (user_id, recipe_id)
            VALUES (:p1, (SELECT id FROM ins_recipe))
        )"""
        + names.statements("(SELECT id FROM ins_recipe)")
        + """
        SELECT id FROM ins_recipe"""
    )

    return Statement(sql, recipe_params(user_id, recipe) + names.values)


INSERT_USER = """
    INSERT INTO users (username, email, hashed_password)
    VALUES (:p1, :p2, :p3)
    RETURNING id"""


# UPDATE


def update_recipe_statement(recipe: RecipeUpdate) -> Statement:
    """Update a recipe in place and relink its child lists.

    Existing links must be cleared with ``DELETE_RECIPE_LINKS`` first. The
    image only changes when the new value is set, is not the nil UUID and
    differs from the stored one.
    """
    names = NameParams(recipe_name_tables(recipe))

    sql = (
        """
        WITH ins_category AS (
            INSERT INTO categories (name)
            VALUES (:p7)
            ON CONFLICT ON CONSTRAINT categories_name_key DO UPDATE
            SET name = NULL
            WHERE FALSE
            RETURNING id, name
        ), upd_category_recipe AS (
            UPDATE category_recipe
            SET
                category_id = (
                    SELECT id FROM ins_category
                    UNION ALL
                    SELECT id FROM categories WHERE name = :p7
                )
            WHERE recipe_id = :p1
        ), upd_nutrition AS (
            UPDATE nutrition
            SET
                calories = :p8,
                total_carbohydrates = :p9,
                sugars = :p10,
                protein = :p11,
                total_fat = :p12,
                saturated_fat = :p13,
                cholesterol = :p14,
                sodium = :p15,
                fiber = :p16
            WHERE recipe_id = :p1
        ), ins_times AS (
            INSERT INTO times (prep, cook)
            VALUES (CAST(:p17 AS interval), CAST(:p18 AS interval))
            ON CONFLICT ON CONSTRAINT times_prep_cook_key DO UPDATE
            SET prep = NULL
            WHERE FALSE
            RETURNING id
        ), upd_time_recipe AS (
            UPDATE time_recipe
            SET
                time_id = (
                    SELECT id FROM ins_times
                    UNION ALL
                    SELECT id FROM times
                    WHERE prep = CAST(:p17 AS interval) AND cook = CAST(:p18 AS interval)
                )
            WHERE recipe_id = :p1
        )"""
        + names.statements(":p1")
        + f"""
        UPDATE recipes
        SET
            name = :p2,
            description = :p3,
            image = CASE
                WHEN
                    CAST(:p4 AS uuid) IS NOT NULL AND
                    CAST(:p4 AS uuid) <> CAST('{NIL_UUID}' AS uuid) AND
                    CAST(:p4 AS uuid) <> image
                THEN CAST(:p4 AS uuid)
                ELSE image
            END,
            url = :p5,
            yield = :p6,
            updated_at = now()
        WHERE id = :p1"""
    )

    return Statement(sql, recipe_params(recipe.id, recipe) + names.values)


# DELETE

DELETE_RECIPE = """
    DELETE FROM recipes
    WHERE id = :p1
    RETURNING id"""

DELETE_RECIPE_LINKS = """
    WITH del_ingredients AS (
        DELETE FROM ingredient_recipe
        WHERE recipe_id = :p1
    ), del_instructions AS (
        DELETE FROM instruction_recipe
        WHERE recipe_id = :p1
    ), del_tools AS (
        DELETE FROM tool_recipe
        WHERE recipe_id = :p1
    )
    DELETE FROM keyword_recipe
    WHERE recipe_id = :p1"""
