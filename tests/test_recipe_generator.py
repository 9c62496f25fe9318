"""Tests for the template recipe generator and recipe models."""

from __future__ import annotations

import random

import pytest

from pantrychef.profiles.body_calc import NutritionTargets, UserProfile
from pantrychef.recipes.generator import TemplateRecipeGenerator
from pantrychef.recipes.models import (
    GeneratedRecipe,
    GenerationContext,
    NutritionalInfo,
    RecipeRequest,
)

TARGETS = NutritionTargets(2883, 180, 324, 96)


def make_context(request=None, targets=TARGETS, consumed=0):
    return GenerationContext(
        profile=UserProfile(weight=80, height=180, age=30),
        targets=targets,
        request=request or RecipeRequest(),
        consumed_calories=consumed,
    )


def generate(request=None, targets=TARGETS, consumed=0, seed=42):
    generator = TemplateRecipeGenerator(random.Random(seed))
    return generator.generate(make_context(request, targets, consumed))


class TestRecipeRequest:
    """Tests for RecipeRequest validation."""

    def test_defaults(self):
        request = RecipeRequest()
        assert request.meal_type == "dinner"
        assert request.servings == 1
        assert request.spice_level == "mild"

    def test_zero_servings_rejected(self):
        with pytest.raises(ValueError):
            RecipeRequest(servings=0)


class TestGenerationContext:
    """Tests for GenerationContext."""

    def test_remaining_calories(self):
        assert make_context(consumed=883).remaining_calories == 2000

    def test_remaining_can_go_negative(self):
        assert make_context(consumed=3000).remaining_calories == -117


class TestTemplateRecipeGenerator:
    """Tests for TemplateRecipeGenerator."""

    def test_default_name(self):
        """Test the name built from spice, cuisine and meal type."""
        recipe = generate()
        assert recipe.recipe_name == "Mild Delicious Dinner Dish"

    def test_name_uses_request(self):
        recipe = generate(RecipeRequest(meal_type="lunch", cuisine_preference="thai",
                                        spice_level="hot"))
        assert recipe.recipe_name == "Hot Thai Lunch Dish"

    def test_same_seed_same_recipe(self):
        """Test that a fixed seed makes recipe content reproducible."""
        first = generate(seed=7).to_dict()
        second = generate(seed=7).to_dict()
        assert first.pop("recipe_id") != second.pop("recipe_id")
        assert first == second

    def test_recipe_shape(self):
        recipe = generate(RecipeRequest(servings=2))
        assert recipe.servings == 2
        assert len(recipe.ingredients) == 6
        assert len(recipe.instructions) == 4
        assert 10 <= recipe.prep_time_minutes <= 20
        assert 20 <= recipe.cook_time_minutes <= 40
        assert len(recipe.recipe_id) == 32

    def test_protein_grams_scale_with_servings(self):
        recipe = generate(RecipeRequest(servings=3))
        grams = int(recipe.ingredients[0].split("g ", 1)[0])
        assert 450 <= grams <= 750

    def test_nutrition_capped_per_serving(self):
        """Test that large targets are capped at the per-serving maximum."""
        info = generate().nutritional_info
        assert info == NutritionalInfo(
            calories=500, protein_grams=30, carbs_grams=50, fat_grams=20
        )

    def test_nutrition_caps_scale_with_servings(self):
        info = generate(RecipeRequest(servings=2)).nutritional_info
        assert info == NutritionalInfo(
            calories=1000, protein_grams=60, carbs_grams=100, fat_grams=40
        )

    def test_calories_follow_remaining(self):
        """Test that calories track what is left for the day."""
        info = generate(consumed=2583).nutritional_info
        assert info.calories == 300

    def test_nutrition_floors(self):
        """Test the floors when the day is over budget or targets are tiny."""
        info = generate(targets=NutritionTargets(1500, 2, 3, 1), consumed=1800).nutritional_info
        assert info == NutritionalInfo(
            calories=100, protein_grams=5, carbs_grams=10, fat_grams=5
        )

    def test_notes_list_exclusions(self):
        recipe = generate(RecipeRequest(excluded_ingredients="peanuts"))
        assert recipe.notes.startswith("Generated from a recipe template.")
        assert "Exclusions: peanuts." in recipe.notes
        assert "Inclusions: None." in recipe.notes

    def test_meal_prep_description(self):
        recipe = generate(RecipeRequest(meal_prep_focus=True, cooking_method="bake"))
        assert "Bake method" in recipe.description
        assert recipe.description.endswith("Great for meal prep!")


class TestGeneratedRecipe:
    """Tests for GeneratedRecipe serialization."""

    def test_dict_round_trip_keeps_id(self):
        recipe = generate()
        restored = GeneratedRecipe.from_dict(recipe.to_dict())
        assert restored.recipe_id == recipe.recipe_id
        assert restored.nutritional_info == recipe.nutritional_info

    def test_from_dict_without_nutrition(self):
        recipe = GeneratedRecipe.from_dict({"recipe_name": "Toast"})
        assert recipe.nutritional_info is None
        assert recipe.servings == 1
        assert recipe.recipe_id
