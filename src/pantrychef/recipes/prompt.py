"""Generate LLM-ready prompts for recipe and meal plan generation."""

from __future__ import annotations

from string import Template

from pantrychef.profiles.body_calc import NutritionTargets, UserProfile
from pantrychef.recipes.models import GenerationContext

RECIPE_TEMPLATE = """You are an AI-powered personal chef. Generate a single recipe in JSON format.
The recipe should be for a $MEAL_TYPE meal.
Consider the following:
- User Profile: Age $AGE, Gender $GENDER, Activity Level $ACTIVITY.
- Weight Goal: $GOAL weight.
- Nutritional Targets: The recipe should help the user reach their daily target of $CALORIE_TARGET calories, with current consumed calories today being $CONSUMED. Focus on making this meal contribute to the remaining $REMAINING calories.
  * Target Protein: ${PROTEIN}g
  * Target Carbs: ${CARBS}g
  * Target Fat: ${FAT}g
- Available Pantry Items: $PANTRY.
- PRIORITY: If available, strongly prioritize using these expiring items: $EXPIRING.
- Cuisine Preference: $CUISINE.
- Cooking Time: Aim for around $COOKING_TIME minutes.
- Dietary Restrictions: $RESTRICTIONS. Ensure the recipe strictly adheres to these.
- Number of Servings: $SERVINGS
- Excluded Ingredients: $EXCLUDED
- Included Ingredients: $INCLUDED
- Spice Level: $SPICE
- Cooking Method: $METHOD
- Meal Prep Focus: $MEAL_PREP

IMPORTANT: The output MUST be a valid JSON object with the following structure. Ensure 'ingredients' is an array of strings, and 'instructions' is an array of strings.
{
  "recipe_name": "string",
  "description": "string",
  "prep_time_minutes": number,
  "cook_time_minutes": number,
  "servings": number,
  "ingredients": ["string", "string", ...],
  "instructions": ["string", "string", ...],
  "nutritional_info": {
    "calories": number,
    "protein_grams": number,
    "carbs_grams": number,
    "fat_grams": number
  },
  "notes": "string"
}
"""

REFINE_TEMPLATE = """
**Refinement Request:** The previous recipe was "$PREVIOUS". Please provide an alternative or refined version based on the same criteria, perhaps with a different approach or ingredient focus.
"""

MEAL_PLAN_TEMPLATE = """You are an AI-powered meal planner. Generate a full daily meal plan in JSON format.
The plan should include Breakfast, Lunch, Dinner, and 1-2 Snacks.
The total nutritional values for the day should aim to meet the user's targets.

- User Profile: Age $AGE, Gender $GENDER, Activity Level $ACTIVITY.
- Weight Goal: $GOAL weight.
- Daily Nutritional Targets:
  * Total Calories: $CALORIE_TARGET kcal
  * Total Protein: ${PROTEIN}g
  * Total Carbs: ${CARBS}g
  * Total Fat: ${FAT}g
- Dietary Restrictions: $RESTRICTIONS.

IMPORTANT: The output MUST be a valid JSON object with the following structure.
{
  "date": "YYYY-MM-DD",
  "total_calories": number,
  "total_protein": number,
  "total_carbs": number,
  "total_fat": number,
  "meals": [
    {
      "meal_type": "Breakfast",
      "recipe_name": "string",
      "calories": number,
      "protein": number,
      "carbs": number,
      "fat": number
    }
  ]
}
"""


def _or_none(value: str, default: str = "None") -> str:
    return value if value.strip() else default


def _profile_fields(profile: UserProfile, targets: NutritionTargets) -> dict:
    return {
        "AGE": profile.age,
        "GENDER": profile.gender,
        "ACTIVITY": profile.activity_level,
        "GOAL": profile.goal,
        "CALORIE_TARGET": targets.calorie_target,
        "PROTEIN": targets.protein_target,
        "CARBS": targets.carb_target,
        "FAT": targets.fat_target,
        "RESTRICTIONS": _or_none(profile.dietary_restrictions),
    }


def build_recipe_prompt(context: GenerationContext) -> str:
    """Render the single-recipe prompt for a generation context."""
    request = context.request
    fields = _profile_fields(context.profile, context.targets)
    fields.update({
        "MEAL_TYPE": request.meal_type,
        "CONSUMED": context.consumed_calories,
        "REMAINING": context.remaining_calories,
        "PANTRY": ", ".join(context.pantry_items),
        "EXPIRING": ", ".join(context.expiring_items) or "None",
        "CUISINE": _or_none(request.cuisine_preference, "any"),
        "COOKING_TIME": _or_none(request.cooking_time, "45"),
        "SERVINGS": request.servings,
        "EXCLUDED": _or_none(request.excluded_ingredients),
        "INCLUDED": _or_none(request.included_ingredients),
        "SPICE": request.spice_level,
        "METHOD": _or_none(request.cooking_method, "any"),
        "MEAL_PREP": (
            "Yes, optimize for larger batches and reheatability."
            if request.meal_prep_focus
            else "No, focus on single meal."
        ),
    })

    prompt = Template(RECIPE_TEMPLATE).substitute(fields)
    if request.refine:
        previous = request.previous_recipe_name or "an earlier recipe"
        prompt += Template(REFINE_TEMPLATE).substitute(PREVIOUS=previous)
    return prompt


def build_meal_plan_prompt(profile: UserProfile, targets: NutritionTargets) -> str:
    """Render the daily meal plan prompt."""
    return Template(MEAL_PLAN_TEMPLATE).substitute(_profile_fields(profile, targets))
