"""Tests for pantry rules, daily totals and coaching insights."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from pantrychef.profiles.body_calc import NutritionTargets
from pantrychef.tracking.insights import (
    coaching_insights,
    daily_totals,
    expiring_items,
    is_recipe_logged_on,
    macro_progress,
    sort_pantry_items,
)
from pantrychef.tracking.models import DailyTotals, LoggedMeal, PantryItem, WeightEntry

TODAY = date(2026, 3, 15)
TARGETS = NutritionTargets(2000, 125, 225, 67)


def item(name, expires=None, added=datetime(2026, 3, 1, 9, 0)):
    return PantryItem(item_id=None, name=name, added_at=added, expiration_date=expires)


def meal(calories, logged_at, protein=0, carbs=0, fat=0, recipe_id=None):
    return LoggedMeal(
        log_id=None,
        recipe_name="Meal",
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        logged_at=logged_at,
        source="generated" if recipe_id else "manual",
        recipe_id=recipe_id,
    )


def weights(*values):
    return [
        WeightEntry(entry_id=i, weight=w, logged_at=datetime(2026, 3, 1 + i))
        for i, w in enumerate(values)
    ]


class TestPantryOrdering:
    """Tests for sort_pantry_items."""

    def test_soonest_first_undated_last(self):
        items = [
            item("flour"),
            item("milk", date(2026, 3, 20)),
            item("eggs", date(2026, 3, 16)),
        ]
        assert [i.name for i in sort_pantry_items(items)] == ["eggs", "milk", "flour"]

    def test_ties_broken_by_added_at(self):
        items = [
            item("b", date(2026, 3, 20), added=datetime(2026, 3, 2)),
            item("a", date(2026, 3, 20), added=datetime(2026, 3, 1)),
        ]
        assert [i.name for i in sort_pantry_items(items)] == ["a", "b"]


class TestExpiringItems:
    """Tests for expiring_items."""

    def test_window_is_inclusive(self):
        """Test that today and today + 7 are both inside the window."""
        items = [
            item("today", date(2026, 3, 15)),
            item("edge", date(2026, 3, 22)),
            item("past_edge", date(2026, 3, 23)),
            item("expired", date(2026, 3, 14)),
            item("undated"),
        ]
        names = [i.name for i in expiring_items(items, TODAY)]
        assert names == ["today", "edge"]

    def test_custom_window(self):
        items = [item("soon", date(2026, 3, 17)), item("later", date(2026, 3, 19))]
        assert [i.name for i in expiring_items(items, TODAY, within_days=2)] == ["soon"]


class TestDailyTotals:
    """Tests for daily_totals and is_recipe_logged_on."""

    def test_sums_only_that_day(self):
        meals = [
            meal(500, datetime(2026, 3, 15, 8, 0), protein=30, carbs=50, fat=10),
            meal(700, datetime(2026, 3, 15, 19, 0), protein=40, carbs=60, fat=20),
            meal(900, datetime(2026, 3, 14, 23, 59), protein=50),
        ]
        totals = daily_totals(meals, TODAY)
        assert totals == DailyTotals(
            day=TODAY, calories=1200, protein=70, carbs=110, fat=30, meal_count=2
        )

    def test_empty_day(self):
        assert daily_totals([], TODAY).calories == 0

    def test_recipe_logged_today(self):
        meals = [meal(500, datetime(2026, 3, 15, 8, 0), recipe_id="abc")]
        assert is_recipe_logged_on(meals, "abc", TODAY)
        assert not is_recipe_logged_on(meals, "abc", date(2026, 3, 16))
        assert not is_recipe_logged_on(meals, None, TODAY)


class TestMacroProgress:
    """Tests for macro_progress."""

    def test_all_ok(self):
        totals = DailyTotals(day=TODAY, calories=1900, protein=120, carbs=200, fat=60)
        assert set(macro_progress(totals, TARGETS).values()) == {"ok"}

    def test_thresholds(self):
        totals = DailyTotals(day=TODAY, calories=2100, protein=90, carbs=290, fat=90)
        assert macro_progress(totals, TARGETS) == {
            "calories": "over",
            "protein": "low",
            "carbs": "over",
            "fat": "over",
        }

    def test_unestablished_targets(self):
        totals = DailyTotals(day=TODAY, calories=500)
        assert set(macro_progress(totals, NutritionTargets()).values()) == {"ok"}


class TestCoachingInsights:
    """Tests for coaching_insights."""

    def kinds(self, **kwargs):
        params = {
            "targets": TARGETS,
            "totals": DailyTotals(day=TODAY, calories=1800),
            "goal": "maintain",
            "expiring": [],
            "weight_history": [],
        }
        params.update(kwargs)
        return [i.kind for i in coaching_insights(**params)]

    def test_on_track_has_no_insights(self):
        assert self.kinds() == []

    def test_over_calories(self):
        insights = coaching_insights(
            TARGETS, DailyTotals(day=TODAY, calories=2300), "maintain", [], []
        )
        assert [i.kind for i in insights] == ["calories_over"]
        assert insights[0].level == "warning"
        assert "by 300 kcal" in insights[0].message

    def test_exactly_110_percent_is_not_over(self):
        assert self.kinds(totals=DailyTotals(day=TODAY, calories=2200)) == []

    def test_under_calories(self):
        assert self.kinds(totals=DailyTotals(day=TODAY, calories=1000)) == ["calories_under"]

    def test_no_calorie_insights_without_targets(self):
        assert self.kinds(targets=NutritionTargets(),
                          totals=DailyTotals(day=TODAY, calories=0)) == []

    def test_expiring_items_listed(self):
        insights = coaching_insights(
            TARGETS,
            DailyTotals(day=TODAY, calories=1800),
            "maintain",
            [item("spinach", TODAY), item("milk", TODAY)],
            [],
        )
        assert insights[0].kind == "expiring"
        assert "spinach, milk" in insights[0].message

    @pytest.mark.parametrize(
        "goal,history,expected",
        [
            ("lose", (80.0, 79.5), "weight_progress"),
            ("lose", (80.0, 80.0), "weight_stall"),
            ("gain", (70.0, 70.4), "weight_progress"),
            ("gain", (70.0, 69.8), "weight_stall"),
        ],
    )
    def test_weight_trend(self, goal, history, expected):
        assert self.kinds(goal=goal, weight_history=weights(*history)) == [expected]

    def test_maintain_has_no_weight_insight(self):
        assert self.kinds(weight_history=weights(80.0, 81.0)) == []

    def test_single_weight_entry_is_not_a_trend(self):
        assert self.kinds(goal="lose", weight_history=weights(80.0)) == []
