"""Data models for pantry, meal log and weight tracking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

VALID_MEAL_SOURCES = ("generated", "manual")


@dataclass
class PantryItem:
    """An ingredient the user has on hand."""

    item_id: Optional[int]
    name: str
    added_at: datetime
    expiration_date: Optional[date] = None


@dataclass
class LoggedMeal:
    """A meal the user ate."""

    log_id: Optional[int]
    recipe_name: str
    calories: int
    protein: int
    carbs: int
    fat: int
    logged_at: datetime
    source: str = "manual"  # 'generated' or 'manual'
    recipe_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.source not in VALID_MEAL_SOURCES:
            raise ValueError(
                f"source must be one of {VALID_MEAL_SOURCES}, got '{self.source}'"
            )


@dataclass
class WeightEntry:
    """A single weight log entry."""

    entry_id: Optional[int]
    weight: float  # kg
    logged_at: datetime


@dataclass
class RecipeFeedback:
    """A rating and comment left on a generated recipe."""

    feedback_id: Optional[int]
    recipe_id: str
    recipe_name: str
    rating: int  # 0-5, 0 meaning unrated
    feedback: str
    submitted_at: datetime


@dataclass
class DailyTotals:
    """Nutrients consumed on one calendar day."""

    day: date
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    meal_count: int = 0

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "meal_count": self.meal_count,
        }
