"""Pantry rules, daily totals and coaching insights.

Everything here is a plain function over already-loaded records, so the
dashboard logic can be tested without a database.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from pantrychef.profiles.body_calc import Goal, NutritionTargets
from pantrychef.tracking.models import DailyTotals, LoggedMeal, PantryItem, WeightEntry

DEFAULT_EXPIRING_WITHIN_DAYS = 7

# Fractions of the calorie target that trigger a coaching message
CALORIE_OVER_RATIO = 1.1
CALORIE_UNDER_RATIO = 0.7

# Macro progress thresholds
PROTEIN_LOW_RATIO = 0.75
CARBS_OVER_RATIO = 1.25
FAT_OVER_RATIO = 1.25


@dataclass
class Insight:
    """A coaching message for the dashboard."""

    kind: str   # 'calories_over', 'calories_under', 'expiring', 'weight_progress', 'weight_stall'
    level: str  # 'warning', 'notice', 'success'
    message: str


def sort_pantry_items(items: Iterable[PantryItem]) -> list[PantryItem]:
    """Order by expiration date (undated last), then by when they were added."""
    return sorted(
        items,
        key=lambda item: (
            item.expiration_date is None,
            item.expiration_date or date.max,
            item.added_at,
        ),
    )


def expiring_items(
    items: Iterable[PantryItem],
    today: date,
    within_days: int = DEFAULT_EXPIRING_WITHIN_DAYS,
) -> list[PantryItem]:
    """Return items expiring between today and today + within_days, inclusive."""
    horizon = today + timedelta(days=within_days)
    return [
        item
        for item in sort_pantry_items(items)
        if item.expiration_date is not None and today <= item.expiration_date <= horizon
    ]


def meals_on(meals: Iterable[LoggedMeal], day: date) -> list[LoggedMeal]:
    """Return the meals logged on a calendar day, oldest first."""
    return sorted(
        (m for m in meals if m.logged_at.date() == day),
        key=lambda m: m.logged_at,
    )


def daily_totals(meals: Iterable[LoggedMeal], day: date) -> DailyTotals:
    """Sum the nutrients of meals logged on a calendar day."""
    totals = DailyTotals(day=day)
    for meal in meals_on(meals, day):
        totals.calories += meal.calories
        totals.protein += meal.protein
        totals.carbs += meal.carbs
        totals.fat += meal.fat
        totals.meal_count += 1
    return totals


def is_recipe_logged_on(
    meals: Iterable[LoggedMeal], recipe_id: Optional[str], day: date
) -> bool:
    if not recipe_id:
        return False
    return any(m.recipe_id == recipe_id for m in meals_on(meals, day))


def macro_progress(totals: DailyTotals, targets: NutritionTargets) -> dict[str, str]:
    """Classify each nutrient as 'ok', 'low' or 'over' against its target."""
    status = {"calories": "ok", "protein": "ok", "carbs": "ok", "fat": "ok"}
    if not targets.is_established:
        return status

    if totals.calories > targets.calorie_target:
        status["calories"] = "over"
    if totals.protein < targets.protein_target * PROTEIN_LOW_RATIO:
        status["protein"] = "low"
    if totals.carbs > targets.carb_target * CARBS_OVER_RATIO:
        status["carbs"] = "over"
    if totals.fat > targets.fat_target * FAT_OVER_RATIO:
        status["fat"] = "over"
    return status


def _weight_insight(goal: str, history: list[WeightEntry]) -> Optional[Insight]:
    if len(history) < 2:
        return None

    ordered = sorted(history, key=lambda e: e.logged_at)
    previous, latest = ordered[-2].weight, ordered[-1].weight

    if goal == Goal.LOSE.value:
        if latest >= previous:
            return Insight(
                "weight_stall",
                "notice",
                "Your recent weight log shows no loss. Let's review your calorie "
                "intake and activity level. Consistency is key!",
            )
        return Insight(
            "weight_progress",
            "success",
            "Great job! Your weight is trending in the right direction for your "
            "loss goal. Keep up the good work!",
        )

    if goal == Goal.GAIN.value:
        if latest <= previous:
            return Insight(
                "weight_stall",
                "notice",
                "Your recent weight log shows no gain. Let's ensure you're "
                "consistently hitting your calorie surplus.",
            )
        return Insight(
            "weight_progress",
            "success",
            "Excellent! You're making progress towards your weight gain goal.",
        )

    return None


def coaching_insights(
    targets: NutritionTargets,
    totals: DailyTotals,
    goal: str,
    expiring: list[PantryItem],
    weight_history: list[WeightEntry],
) -> list[Insight]:
    """Build the dashboard's coaching messages."""
    insights: list[Insight] = []

    if targets.is_established:
        target = targets.calorie_target
        if totals.calories > target * CALORIE_OVER_RATIO:
            insights.append(Insight(
                "calories_over",
                "warning",
                "Warning: You've significantly exceeded your daily calorie target "
                f"by {totals.calories - target} kcal today. Consider lighter options "
                "for your next meal or increasing activity tomorrow.",
            ))
        if totals.calories < target * CALORIE_UNDER_RATIO:
            insights.append(Insight(
                "calories_under",
                "notice",
                "Heads up: You're significantly below your calorie target today. "
                "Ensure you're fueling your body adequately!",
            ))

    if expiring:
        names = ", ".join(item.name for item in expiring)
        insights.append(Insight(
            "expiring",
            "notice",
            f"Don't forget! You have items like {names} nearing expiration. "
            "Try to use them in your next generated recipe to reduce food waste!",
        ))

    weight = _weight_insight(goal, weight_history)
    if weight is not None:
        insights.append(weight)

    return insights
