"""Tests for recipe and meal plan prompt rendering."""

from __future__ import annotations

from pantrychef.profiles.body_calc import NutritionTargets, UserProfile
from pantrychef.recipes.models import GenerationContext, RecipeRequest
from pantrychef.recipes.prompt import build_meal_plan_prompt, build_recipe_prompt

PROFILE = UserProfile(
    weight=80,
    height=180,
    age=30,
    gender="male",
    activity_level="moderately_active",
    goal="lose",
    dietary_restrictions="vegetarian",
)
TARGETS = NutritionTargets(2383, 149, 268, 79)


class TestRecipePrompt:
    """Tests for build_recipe_prompt."""

    def test_includes_profile_and_targets(self):
        context = GenerationContext(
            profile=PROFILE, targets=TARGETS, request=RecipeRequest(), consumed_calories=400
        )
        prompt = build_recipe_prompt(context)

        assert "The recipe should be for a dinner meal." in prompt
        assert "Age 30, Gender male, Activity Level moderately_active." in prompt
        assert "Weight Goal: lose weight." in prompt
        assert "daily target of 2383 calories" in prompt
        assert "consumed calories today being 400" in prompt
        assert "remaining 1983 calories" in prompt
        assert "Target Protein: 149g" in prompt
        assert "Dietary Restrictions: vegetarian." in prompt

    def test_defaults_for_blank_fields(self):
        context = GenerationContext(profile=UserProfile(), targets=TARGETS,
                                    request=RecipeRequest())
        prompt = build_recipe_prompt(context)

        assert "expiring items: None." in prompt
        assert "Cuisine Preference: any." in prompt
        assert "around 45 minutes" in prompt
        assert "Cooking Method: any" in prompt
        assert "Dietary Restrictions: None." in prompt
        assert "Meal Prep Focus: No, focus on single meal." in prompt
        assert "Refinement Request" not in prompt

    def test_pantry_and_expiring_items(self):
        context = GenerationContext(
            profile=PROFILE,
            targets=TARGETS,
            request=RecipeRequest(),
            pantry_items=["rice", "spinach"],
            expiring_items=["spinach"],
        )
        prompt = build_recipe_prompt(context)
        assert "Available Pantry Items: rice, spinach." in prompt
        assert "expiring items: spinach." in prompt

    def test_refinement_names_previous_recipe(self):
        request = RecipeRequest(refine=True, previous_recipe_name="Mild Thai Dinner Dish")
        context = GenerationContext(profile=PROFILE, targets=TARGETS, request=request)
        prompt = build_recipe_prompt(context)
        assert 'The previous recipe was "Mild Thai Dinner Dish".' in prompt

    def test_refinement_without_previous_name(self):
        request = RecipeRequest(refine=True)
        context = GenerationContext(profile=PROFILE, targets=TARGETS, request=request)
        assert '"an earlier recipe"' in build_recipe_prompt(context)


class TestMealPlanPrompt:
    """Tests for build_meal_plan_prompt."""

    def test_includes_daily_targets(self):
        prompt = build_meal_plan_prompt(PROFILE, TARGETS)
        assert "Total Calories: 2383 kcal" in prompt
        assert "Total Fat: 79g" in prompt
        assert "Dietary Restrictions: vegetarian." in prompt
        assert '"meal_type": "Breakfast"' in prompt
