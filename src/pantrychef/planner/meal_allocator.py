"""Daily meal plan allocation.

Splits a day's calorie and macro targets across four fixed meal slots
(breakfast, lunch, snack, dinner). Each nutrient has its own weight table;
breakfast, lunch and snack take a truncated share and dinner absorbs the
remainder, so the slots always add up to the daily total exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional, Union

from pantrychef.profiles.body_calc import NutritionTargets


class MealType(Enum):
    """Meal slots in generation order."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    SNACK = "Snack"
    DINNER = "Dinner"


# Shares for breakfast, lunch and snack; dinner takes what is left
SLOT_WEIGHTS: dict[str, tuple[float, float, float]] = {
    "calories": (0.25, 0.35, 0.10),
    "protein": (0.25, 0.35, 0.10),
    "carbs": (0.30, 0.35, 0.10),
    "fat": (0.20, 0.40, 0.15),
}

PLACEHOLDER_RECIPES: dict[MealType, str] = {
    MealType.BREAKFAST: "Overnight Oats with Berries",
    MealType.LUNCH: "Grilled Chicken Salad with Vinaigrette",
    MealType.SNACK: "Apple Slices with Almond Butter",
    MealType.DINNER: "Baked Salmon with Roasted Asparagus",
}


@dataclass
class MealPlanEntry:
    """One meal of a daily plan."""

    meal_type: str
    recipe_name: str
    calories: int
    protein: int
    carbs: int
    fat: int
    recipe_id: Optional[str] = None


@dataclass
class DailyMealPlan:
    """A full day of meals whose nutrients sum to the day's totals."""

    date: str  # YYYY-MM-DD
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fat: int
    meals: list[MealPlanEntry] = field(default_factory=list)

    def meal(self, meal_type: MealType) -> MealPlanEntry:
        """Return the entry for a meal slot."""
        for entry in self.meals:
            if entry.meal_type == meal_type.value:
                return entry
        raise KeyError(meal_type.value)


def split_nutrient(total: int, weights: tuple[float, float, float]) -> list[int]:
    """Split a daily total into four slot amounts.

    The first three slots are truncated, not rounded; the fourth slot
    is whatever remains. The four values always sum to ``total``.

    Args:
        total: Daily total for the nutrient
        weights: Shares for the first three slots

    Returns:
        Four integers in slot order
    """
    shares = [int(total * weight) for weight in weights]
    shares.append(total - sum(shares))
    return shares


def _as_iso_date(plan_date: Union[date, str]) -> str:
    if isinstance(plan_date, date):
        return plan_date.isoformat()
    # Validates YYYY-MM-DD
    return date.fromisoformat(plan_date).isoformat()


def allocate(
    targets: NutritionTargets,
    plan_date: Union[date, str],
    recipe_names: Optional[dict[MealType, str]] = None,
) -> DailyMealPlan:
    """Distribute daily targets across breakfast, lunch, snack and dinner.

    Callers must only allocate established targets; zero calories means the
    profile is incomplete and is a bug on the calling side.

    Args:
        targets: Daily targets from compute_targets
        plan_date: Calendar day of the plan
        recipe_names: Optional recipe name per meal, overriding placeholders

    Returns:
        DailyMealPlan with one entry per meal slot
    """
    assert targets.calorie_target > 0, "allocate() requires established targets"
    assert min(
        targets.protein_target, targets.carb_target, targets.fat_target
    ) >= 0, "nutrient totals must be non-negative"

    names = dict(PLACEHOLDER_RECIPES)
    if recipe_names:
        names.update(recipe_names)

    calories = split_nutrient(targets.calorie_target, SLOT_WEIGHTS["calories"])
    protein = split_nutrient(targets.protein_target, SLOT_WEIGHTS["protein"])
    carbs = split_nutrient(targets.carb_target, SLOT_WEIGHTS["carbs"])
    fat = split_nutrient(targets.fat_target, SLOT_WEIGHTS["fat"])

    meals = [
        MealPlanEntry(
            meal_type=meal_type.value,
            recipe_name=names[meal_type],
            calories=calories[i],
            protein=protein[i],
            carbs=carbs[i],
            fat=fat[i],
        )
        for i, meal_type in enumerate(MealType)
    ]

    return DailyMealPlan(
        date=_as_iso_date(plan_date),
        total_calories=targets.calorie_target,
        total_protein=targets.protein_target,
        total_carbs=targets.carb_target,
        total_fat=targets.fat_target,
        meals=meals,
    )


def plan_to_dict(plan: DailyMealPlan) -> dict[str, Any]:
    """Format a meal plan for JSON output."""
    return {
        "date": plan.date,
        "total_calories": plan.total_calories,
        "total_protein": plan.total_protein,
        "total_carbs": plan.total_carbs,
        "total_fat": plan.total_fat,
        "meals": [
            {
                "meal_type": meal.meal_type,
                "recipe_name": meal.recipe_name,
                "calories": meal.calories,
                "protein": meal.protein,
                "carbs": meal.carbs,
                "fat": meal.fat,
                "recipe_id": meal.recipe_id,
            }
            for meal in plan.meals
        ],
    }


def plan_from_dict(data: dict[str, Any]) -> DailyMealPlan:
    """Rebuild a meal plan from plan_to_dict output."""
    return DailyMealPlan(
        date=data["date"],
        total_calories=data["total_calories"],
        total_protein=data["total_protein"],
        total_carbs=data["total_carbs"],
        total_fat=data["total_fat"],
        meals=[
            MealPlanEntry(
                meal_type=m["meal_type"],
                recipe_name=m["recipe_name"],
                calories=m["calories"],
                protein=m["protein"],
                carbs=m["carbs"],
                fat=m["fat"],
                recipe_id=m.get("recipe_id"),
            )
            for m in data.get("meals", [])
        ],
    )


def format_plan_text(plan: DailyMealPlan) -> str:
    """Format a meal plan as markdown."""
    lines = [
        f"## Meal Plan for {plan.date}",
        "",
        f"Totals: {plan.total_calories} kcal, P {plan.total_protein}g, "
        f"C {plan.total_carbs}g, F {plan.total_fat}g",
        "",
    ]

    for meal in plan.meals:
        lines.append(f"### {meal.meal_type}: {meal.recipe_name}")
        lines.append(
            f"  - {meal.calories} kcal | P {meal.protein}g | "
            f"C {meal.carbs}g | F {meal.fat}g"
        )
        lines.append("")

    return "\n".join(lines)
