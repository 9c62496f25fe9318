"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- Body profile (targets are derived, never stored)
CREATE TABLE IF NOT EXISTS user_profiles (
    profile_id INTEGER PRIMARY KEY AUTOINCREMENT,
    weight REAL NOT NULL DEFAULT 0,
    height REAL NOT NULL DEFAULT 0,
    age INTEGER NOT NULL DEFAULT 0,
    gender TEXT NOT NULL DEFAULT 'male',
    activity_level TEXT NOT NULL DEFAULT 'sedentary',
    goal TEXT NOT NULL DEFAULT 'maintain',
    dietary_restrictions TEXT NOT NULL DEFAULT '',
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Weight history
CREATE TABLE IF NOT EXISTS weight_log (
    entry_id INTEGER PRIMARY KEY AUTOINCREMENT,
    weight REAL NOT NULL,
    logged_at TIMESTAMP NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_weight_log_date ON weight_log(logged_at);

-- Pantry inventory
CREATE TABLE IF NOT EXISTS pantry_items (
    item_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    added_at TIMESTAMP NOT NULL,
    expiration_date DATE
);

CREATE INDEX IF NOT EXISTS idx_pantry_items_expiration ON pantry_items(expiration_date);

-- Meals eaten
CREATE TABLE IF NOT EXISTS meal_log (
    log_id INTEGER PRIMARY KEY AUTOINCREMENT,
    recipe_name TEXT NOT NULL,
    calories INTEGER NOT NULL DEFAULT 0,
    protein INTEGER NOT NULL DEFAULT 0,
    carbs INTEGER NOT NULL DEFAULT 0,
    fat INTEGER NOT NULL DEFAULT 0,
    logged_at TIMESTAMP NOT NULL,
    source TEXT NOT NULL DEFAULT 'manual',
    recipe_id TEXT
);

CREATE INDEX IF NOT EXISTS idx_meal_log_date ON meal_log(logged_at);

-- Every generated recipe, stored as JSON
CREATE TABLE IF NOT EXISTS generated_recipes (
    recipe_id TEXT PRIMARY KEY,
    recipe_name TEXT NOT NULL,
    recipe_json TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Favorite recipes, stored as JSON
CREATE TABLE IF NOT EXISTS favorite_recipes (
    recipe_id TEXT PRIMARY KEY,
    recipe_name TEXT NOT NULL,
    recipe_json TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Ratings and comments on generated recipes
CREATE TABLE IF NOT EXISTS recipe_feedback (
    feedback_id INTEGER PRIMARY KEY AUTOINCREMENT,
    recipe_id TEXT NOT NULL,
    recipe_name TEXT NOT NULL,
    rating INTEGER NOT NULL DEFAULT 0,
    feedback TEXT NOT NULL DEFAULT '',
    submitted_at TIMESTAMP NOT NULL
);

-- Generated daily plans, one per date
CREATE TABLE IF NOT EXISTS meal_plans (
    plan_date DATE PRIMARY KEY,
    plan_json TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
