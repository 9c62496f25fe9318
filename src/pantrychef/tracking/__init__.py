"""Pantry, meal log and weight tracking.

Record models plus the pure rules the dashboard runs over them:
pantry ordering, the expiring-item window, daily totals and coaching
insights.
"""

from __future__ import annotations

from pantrychef.tracking.insights import (
    Insight,
    coaching_insights,
    daily_totals,
    expiring_items,
    sort_pantry_items,
)
from pantrychef.tracking.models import (
    DailyTotals,
    LoggedMeal,
    PantryItem,
    RecipeFeedback,
    WeightEntry,
)

__all__ = [
    "DailyTotals",
    "Insight",
    "LoggedMeal",
    "PantryItem",
    "RecipeFeedback",
    "WeightEntry",
    "coaching_insights",
    "daily_totals",
    "expiring_items",
    "sort_pantry_items",
]
