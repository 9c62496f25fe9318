"""Database queries for profiles, pantry, meal log, weight and recipes."""

from __future__ import annotations

import json
import sqlite3
from datetime import date, datetime
from typing import Optional

from pantrychef.planner.meal_allocator import DailyMealPlan, plan_from_dict, plan_to_dict
from pantrychef.profiles.body_calc import UserProfile
from pantrychef.recipes.models import GeneratedRecipe
from pantrychef.tracking.models import LoggedMeal, PantryItem, RecipeFeedback, WeightEntry


class ProfileQueries:
    """Database queries for the body profile."""

    @staticmethod
    def get_profile(conn: sqlite3.Connection) -> Optional[UserProfile]:
        """Get the (single) saved profile."""
        row = conn.execute(
            """
            SELECT profile_id, weight, height, age, gender,
                   activity_level, goal, dietary_restrictions
            FROM user_profiles ORDER BY profile_id LIMIT 1
            """
        ).fetchone()

        if row is None:
            return None

        return UserProfile(
            profile_id=row["profile_id"],
            weight=row["weight"],
            height=row["height"],
            age=row["age"],
            gender=row["gender"],
            activity_level=row["activity_level"],
            goal=row["goal"],
            dietary_restrictions=row["dietary_restrictions"],
        )

    @staticmethod
    def save_profile(conn: sqlite3.Connection, profile: UserProfile) -> int:
        """Insert or update the profile and return its profile_id."""
        values = (
            profile.weight,
            profile.height,
            profile.age,
            profile.gender,
            profile.activity_level,
            profile.goal,
            profile.dietary_restrictions,
        )

        if profile.profile_id is None:
            cursor = conn.execute(
                """
                INSERT INTO user_profiles (weight, height, age, gender,
                                           activity_level, goal, dietary_restrictions)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                values,
            )
            return cursor.lastrowid or 0

        conn.execute(
            """
            UPDATE user_profiles
            SET weight = ?, height = ?, age = ?, gender = ?,
                activity_level = ?, goal = ?, dietary_restrictions = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE profile_id = ?
            """,
            values + (profile.profile_id,),
        )
        return profile.profile_id


class PantryQueries:
    """Database queries for pantry items."""

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> PantryItem:
        return PantryItem(
            item_id=row["item_id"],
            name=row["name"],
            added_at=datetime.fromisoformat(row["added_at"]),
            expiration_date=(
                date.fromisoformat(row["expiration_date"])
                if row["expiration_date"]
                else None
            ),
        )

    @staticmethod
    def add_item(
        conn: sqlite3.Connection,
        name: str,
        added_at: datetime,
        expiration_date: Optional[date] = None,
    ) -> PantryItem:
        cursor = conn.execute(
            """
            INSERT INTO pantry_items (name, added_at, expiration_date)
            VALUES (?, ?, ?)
            """,
            (
                name,
                added_at.isoformat(),
                expiration_date.isoformat() if expiration_date else None,
            ),
        )
        return PantryItem(
            item_id=cursor.lastrowid,
            name=name,
            added_at=added_at,
            expiration_date=expiration_date,
        )

    @staticmethod
    def remove_item(conn: sqlite3.Connection, item_id: int) -> bool:
        """Delete an item. Returns False if it did not exist."""
        cursor = conn.execute("DELETE FROM pantry_items WHERE item_id = ?", (item_id,))
        return cursor.rowcount > 0

    @staticmethod
    def list_items(conn: sqlite3.Connection) -> list[PantryItem]:
        rows = conn.execute(
            "SELECT item_id, name, added_at, expiration_date FROM pantry_items"
        ).fetchall()
        return [PantryQueries._row_to_item(row) for row in rows]


class MealLogQueries:
    """Database queries for the meal log."""

    @staticmethod
    def _row_to_meal(row: sqlite3.Row) -> LoggedMeal:
        return LoggedMeal(
            log_id=row["log_id"],
            recipe_name=row["recipe_name"],
            calories=row["calories"],
            protein=row["protein"],
            carbs=row["carbs"],
            fat=row["fat"],
            logged_at=datetime.fromisoformat(row["logged_at"]),
            source=row["source"],
            recipe_id=row["recipe_id"],
        )

    @staticmethod
    def log_meal(conn: sqlite3.Connection, meal: LoggedMeal) -> LoggedMeal:
        cursor = conn.execute(
            """
            INSERT INTO meal_log (recipe_name, calories, protein, carbs, fat,
                                  logged_at, source, recipe_id)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                meal.recipe_name,
                meal.calories,
                meal.protein,
                meal.carbs,
                meal.fat,
                meal.logged_at.isoformat(),
                meal.source,
                meal.recipe_id,
            ),
        )
        meal.log_id = cursor.lastrowid
        return meal

    @staticmethod
    def get_meals_for_day(conn: sqlite3.Connection, day: date) -> list[LoggedMeal]:
        """Meals logged on a calendar day, oldest first."""
        rows = conn.execute(
            """
            SELECT log_id, recipe_name, calories, protein, carbs, fat,
                   logged_at, source, recipe_id
            FROM meal_log
            WHERE substr(logged_at, 1, 10) = ?
            ORDER BY logged_at
            """,
            (day.isoformat(),),
        ).fetchall()
        return [MealLogQueries._row_to_meal(row) for row in rows]


class WeightQueries:
    """Database queries for weight log entries."""

    @staticmethod
    def add_weight(
        conn: sqlite3.Connection, weight: float, logged_at: datetime
    ) -> WeightEntry:
        cursor = conn.execute(
            "INSERT INTO weight_log (weight, logged_at) VALUES (?, ?)",
            (weight, logged_at.isoformat()),
        )
        return WeightEntry(entry_id=cursor.lastrowid, weight=weight, logged_at=logged_at)

    @staticmethod
    def get_weight_history(
        conn: sqlite3.Connection, limit: Optional[int] = None
    ) -> list[WeightEntry]:
        """Weight history in chronological order.

        Args:
            limit: If set, only the most recent N entries
        """
        query = "SELECT entry_id, weight, logged_at FROM weight_log ORDER BY logged_at DESC"
        params: list = []
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        rows = conn.execute(query, params).fetchall()
        entries = [
            WeightEntry(
                entry_id=row["entry_id"],
                weight=row["weight"],
                logged_at=datetime.fromisoformat(row["logged_at"]),
            )
            for row in rows
        ]
        entries.reverse()
        return entries


class RecipeQueries:
    """Database queries for generated recipes, favorites and feedback."""

    @staticmethod
    def save_generated(conn: sqlite3.Connection, recipe: GeneratedRecipe) -> None:
        conn.execute(
            """
            INSERT OR REPLACE INTO generated_recipes (recipe_id, recipe_name, recipe_json)
            VALUES (?, ?, ?)
            """,
            (recipe.recipe_id, recipe.recipe_name, json.dumps(recipe.to_dict())),
        )

    @staticmethod
    def get_generated(
        conn: sqlite3.Connection, recipe_id: str
    ) -> Optional[GeneratedRecipe]:
        row = conn.execute(
            "SELECT recipe_json FROM generated_recipes WHERE recipe_id = ?",
            (recipe_id,),
        ).fetchone()
        if row is None:
            return None
        return GeneratedRecipe.from_dict(json.loads(row["recipe_json"]))

    @staticmethod
    def save_favorite(conn: sqlite3.Connection, recipe: GeneratedRecipe) -> None:
        conn.execute(
            """
            INSERT OR REPLACE INTO favorite_recipes (recipe_id, recipe_name, recipe_json)
            VALUES (?, ?, ?)
            """,
            (recipe.recipe_id, recipe.recipe_name, json.dumps(recipe.to_dict())),
        )

    @staticmethod
    def remove_favorite(conn: sqlite3.Connection, recipe_id: str) -> bool:
        cursor = conn.execute(
            "DELETE FROM favorite_recipes WHERE recipe_id = ?", (recipe_id,)
        )
        return cursor.rowcount > 0

    @staticmethod
    def is_favorite(conn: sqlite3.Connection, recipe_id: str) -> bool:
        row = conn.execute(
            "SELECT 1 FROM favorite_recipes WHERE recipe_id = ?", (recipe_id,)
        ).fetchone()
        return row is not None

    @staticmethod
    def list_favorites(conn: sqlite3.Connection) -> list[GeneratedRecipe]:
        rows = conn.execute(
            "SELECT recipe_json FROM favorite_recipes ORDER BY created_at, recipe_name"
        ).fetchall()
        recipes = []
        for row in rows:
            recipe = GeneratedRecipe.from_dict(json.loads(row["recipe_json"]))
            recipe.is_favorite = True
            recipes.append(recipe)
        return recipes

    @staticmethod
    def get_favorite(
        conn: sqlite3.Connection, recipe_id: str
    ) -> Optional[GeneratedRecipe]:
        row = conn.execute(
            "SELECT recipe_json FROM favorite_recipes WHERE recipe_id = ?",
            (recipe_id,),
        ).fetchone()
        if row is None:
            return None
        recipe = GeneratedRecipe.from_dict(json.loads(row["recipe_json"]))
        recipe.is_favorite = True
        return recipe

    @staticmethod
    def add_feedback(conn: sqlite3.Connection, feedback: RecipeFeedback) -> RecipeFeedback:
        cursor = conn.execute(
            """
            INSERT INTO recipe_feedback (recipe_id, recipe_name, rating, feedback, submitted_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                feedback.recipe_id,
                feedback.recipe_name,
                feedback.rating,
                feedback.feedback,
                feedback.submitted_at.isoformat(),
            ),
        )
        feedback.feedback_id = cursor.lastrowid
        return feedback

    @staticmethod
    def get_feedback(conn: sqlite3.Connection, recipe_id: str) -> list[RecipeFeedback]:
        rows = conn.execute(
            """
            SELECT feedback_id, recipe_id, recipe_name, rating, feedback, submitted_at
            FROM recipe_feedback WHERE recipe_id = ? ORDER BY submitted_at
            """,
            (recipe_id,),
        ).fetchall()
        return [
            RecipeFeedback(
                feedback_id=row["feedback_id"],
                recipe_id=row["recipe_id"],
                recipe_name=row["recipe_name"],
                rating=row["rating"],
                feedback=row["feedback"],
                submitted_at=datetime.fromisoformat(row["submitted_at"]),
            )
            for row in rows
        ]


class MealPlanQueries:
    """Database queries for generated daily meal plans."""

    @staticmethod
    def save_plan(conn: sqlite3.Connection, plan: DailyMealPlan) -> None:
        """Store a plan, replacing any earlier plan for the same date."""
        conn.execute(
            "INSERT OR REPLACE INTO meal_plans (plan_date, plan_json) VALUES (?, ?)",
            (plan.date, json.dumps(plan_to_dict(plan))),
        )

    @staticmethod
    def get_plan(conn: sqlite3.Connection, plan_date: date) -> Optional[DailyMealPlan]:
        row = conn.execute(
            "SELECT plan_json FROM meal_plans WHERE plan_date = ?",
            (plan_date.isoformat(),),
        ).fetchone()
        if row is None:
            return None
        return plan_from_dict(json.loads(row["plan_json"]))
