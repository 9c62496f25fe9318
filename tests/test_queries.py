"""Tests for the SQLite query classes."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime

import pytest

from pantrychef.db.queries import (
    MealLogQueries,
    MealPlanQueries,
    PantryQueries,
    ProfileQueries,
    RecipeQueries,
    WeightQueries,
)
from pantrychef.planner.meal_allocator import allocate
from pantrychef.profiles.body_calc import NutritionTargets, UserProfile
from pantrychef.recipes.models import GeneratedRecipe, NutritionalInfo
from pantrychef.tracking.models import LoggedMeal, RecipeFeedback


def sample_recipe(recipe_id="r1", name="Mild Thai Dinner Dish"):
    return GeneratedRecipe(
        recipe_id=recipe_id,
        recipe_name=name,
        description="Tasty",
        prep_time_minutes=10,
        cook_time_minutes=20,
        servings=1,
        ingredients=["200g firm tofu"],
        instructions=["Cook it."],
        nutritional_info=NutritionalInfo(500, 30, 50, 20),
    )


class TestSchema:
    """Tests for schema creation."""

    @pytest.mark.parametrize(
        "table",
        [
            "user_profiles",
            "weight_log",
            "pantry_items",
            "meal_log",
            "generated_recipes",
            "favorite_recipes",
            "recipe_feedback",
            "meal_plans",
        ],
    )
    def test_tables_exist(self, temp_db, table):
        assert temp_db.table_exists(table)

    def test_missing_table_count_is_zero(self, temp_db):
        assert temp_db.get_table_count("no_such_table") == 0

    def test_failed_block_rolls_back(self, temp_db):
        """Test that an error inside get_connection discards the writes."""
        with pytest.raises(sqlite3.IntegrityError):
            with temp_db.get_connection() as conn:
                PantryQueries.add_item(conn, "rice", datetime(2026, 3, 15))
                conn.execute("INSERT INTO meal_plans (plan_date, plan_json) VALUES (NULL, NULL)")

        assert temp_db.get_table_count("pantry_items") == 0


class TestProfileQueries:
    """Tests for ProfileQueries."""

    def test_no_profile(self, temp_db):
        with temp_db.get_connection() as conn:
            assert ProfileQueries.get_profile(conn) is None

    def test_insert_then_update(self, temp_db):
        profile = UserProfile(weight=80, height=180, age=30)
        with temp_db.get_connection() as conn:
            profile.profile_id = ProfileQueries.save_profile(conn, profile)

        profile.goal = "lose"
        profile.dietary_restrictions = "vegan"
        with temp_db.get_connection() as conn:
            ProfileQueries.save_profile(conn, profile)
            loaded = ProfileQueries.get_profile(conn)

        assert loaded == profile
        assert temp_db.get_table_count("user_profiles") == 1


class TestPantryQueries:
    """Tests for PantryQueries."""

    def test_add_list_remove(self, temp_db):
        with temp_db.get_connection() as conn:
            rice = PantryQueries.add_item(conn, "rice", datetime(2026, 3, 15, 9, 30))
            milk = PantryQueries.add_item(
                conn, "milk", datetime(2026, 3, 15, 9, 31), date(2026, 3, 18)
            )

        with temp_db.get_connection() as conn:
            items = {i.name: i for i in PantryQueries.list_items(conn)}
        assert items["rice"].expiration_date is None
        assert items["milk"].expiration_date == date(2026, 3, 18)
        assert items["milk"].added_at == datetime(2026, 3, 15, 9, 31)

        with temp_db.get_connection() as conn:
            assert PantryQueries.remove_item(conn, rice.item_id) is True
            assert PantryQueries.remove_item(conn, rice.item_id) is False
            assert [i.item_id for i in PantryQueries.list_items(conn)] == [milk.item_id]


class TestMealLogQueries:
    """Tests for MealLogQueries."""

    def test_meals_for_day(self, temp_db):
        with temp_db.get_connection() as conn:
            for logged_at in (
                datetime(2026, 3, 15, 19, 0),
                datetime(2026, 3, 15, 8, 0),
                datetime(2026, 3, 14, 12, 0),
            ):
                MealLogQueries.log_meal(conn, LoggedMeal(
                    log_id=None, recipe_name="Meal", calories=400, protein=20,
                    carbs=40, fat=10, logged_at=logged_at,
                ))

        with temp_db.get_connection() as conn:
            meals = MealLogQueries.get_meals_for_day(conn, date(2026, 3, 15))

        assert [m.logged_at.hour for m in meals] == [8, 19]
        assert all(m.log_id is not None for m in meals)


class TestWeightQueries:
    """Tests for WeightQueries."""

    def test_history_is_chronological(self, temp_db):
        with temp_db.get_connection() as conn:
            for day, weight in ((3, 80.0), (1, 81.0), (2, 80.5)):
                WeightQueries.add_weight(conn, weight, datetime(2026, 3, day))

        with temp_db.get_connection() as conn:
            history = WeightQueries.get_weight_history(conn)
            recent = WeightQueries.get_weight_history(conn, limit=2)

        assert [e.weight for e in history] == [81.0, 80.5, 80.0]
        assert [e.weight for e in recent] == [80.5, 80.0]

    def test_zero_limit_returns_nothing(self, temp_db):
        with temp_db.get_connection() as conn:
            WeightQueries.add_weight(conn, 80.0, datetime(2026, 3, 1))
            assert WeightQueries.get_weight_history(conn, limit=0) == []


class TestRecipeQueries:
    """Tests for RecipeQueries."""

    def test_generated_round_trip(self, temp_db):
        recipe = sample_recipe()
        with temp_db.get_connection() as conn:
            RecipeQueries.save_generated(conn, recipe)
            loaded = RecipeQueries.get_generated(conn, "r1")
            assert RecipeQueries.get_generated(conn, "missing") is None

        assert loaded.recipe_name == recipe.recipe_name
        assert loaded.nutritional_info == recipe.nutritional_info

    def test_favorites(self, temp_db):
        with temp_db.get_connection() as conn:
            RecipeQueries.save_favorite(conn, sample_recipe("r1", "B Dish"))
            RecipeQueries.save_favorite(conn, sample_recipe("r2", "A Dish"))
            assert RecipeQueries.is_favorite(conn, "r1")
            favorites = RecipeQueries.list_favorites(conn)

        assert {r.recipe_id for r in favorites} == {"r1", "r2"}
        assert all(r.is_favorite for r in favorites)

        with temp_db.get_connection() as conn:
            assert RecipeQueries.remove_favorite(conn, "r1") is True
            assert not RecipeQueries.is_favorite(conn, "r1")
            assert RecipeQueries.get_favorite(conn, "r2").is_favorite

    def test_feedback(self, temp_db):
        with temp_db.get_connection() as conn:
            entry = RecipeQueries.add_feedback(conn, RecipeFeedback(
                feedback_id=None, recipe_id="r1", recipe_name="Dish", rating=4,
                feedback="Nice", submitted_at=datetime(2026, 3, 15, 20, 0),
            ))
            stored = RecipeQueries.get_feedback(conn, "r1")

        assert entry.feedback_id is not None
        assert stored == [entry]


class TestMealPlanQueries:
    """Tests for MealPlanQueries."""

    def test_save_replaces_same_date(self, temp_db):
        first = allocate(NutritionTargets(2000, 125, 225, 67), date(2026, 3, 15))
        second = allocate(NutritionTargets(2400, 150, 270, 80), date(2026, 3, 15))
        with temp_db.get_connection() as conn:
            MealPlanQueries.save_plan(conn, first)
            MealPlanQueries.save_plan(conn, second)
            loaded = MealPlanQueries.get_plan(conn, date(2026, 3, 15))
            assert MealPlanQueries.get_plan(conn, date(2026, 3, 16)) is None

        assert loaded == second
        assert temp_db.get_table_count("meal_plans") == 1
