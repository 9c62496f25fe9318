"""Daily meal plan allocation."""

from pantrychef.planner.meal_allocator import (
    DailyMealPlan,
    MealPlanEntry,
    MealType,
    allocate,
)

__all__ = ["DailyMealPlan", "MealPlanEntry", "MealType", "allocate"]
