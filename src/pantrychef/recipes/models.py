"""Data models for recipe generation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from pantrychef.profiles.body_calc import NutritionTargets, UserProfile


@dataclass
class NutritionalInfo:
    """Per-recipe nutrition facts."""

    calories: int
    protein_grams: int
    carbs_grams: int
    fat_grams: int


@dataclass
class GeneratedRecipe:
    """A recipe produced by a generator."""

    recipe_name: str
    description: str
    prep_time_minutes: int
    cook_time_minutes: int
    servings: int
    ingredients: list[str]
    instructions: list[str]
    nutritional_info: Optional[NutritionalInfo] = None
    notes: Optional[str] = None
    recipe_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    is_favorite: bool = False
    is_logged_today: bool = False

    def to_dict(self) -> dict[str, Any]:
        info = self.nutritional_info
        return {
            "recipe_id": self.recipe_id,
            "recipe_name": self.recipe_name,
            "description": self.description,
            "prep_time_minutes": self.prep_time_minutes,
            "cook_time_minutes": self.cook_time_minutes,
            "servings": self.servings,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "nutritional_info": {
                "calories": info.calories,
                "protein_grams": info.protein_grams,
                "carbs_grams": info.carbs_grams,
                "fat_grams": info.fat_grams,
            } if info else None,
            "notes": self.notes,
            "is_favorite": self.is_favorite,
            "is_logged_today": self.is_logged_today,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratedRecipe":
        info = data.get("nutritional_info")
        kwargs = {}
        if data.get("recipe_id"):
            kwargs["recipe_id"] = data["recipe_id"]
        return cls(
            recipe_name=data["recipe_name"],
            description=data.get("description", ""),
            prep_time_minutes=int(data.get("prep_time_minutes", 0)),
            cook_time_minutes=int(data.get("cook_time_minutes", 0)),
            servings=int(data.get("servings", 1)),
            ingredients=list(data.get("ingredients", [])),
            instructions=list(data.get("instructions", [])),
            nutritional_info=NutritionalInfo(**info) if info else None,
            notes=data.get("notes"),
            is_favorite=bool(data.get("is_favorite", False)),
            is_logged_today=bool(data.get("is_logged_today", False)),
            **kwargs,
        )


@dataclass
class RecipeRequest:
    """What the user asked for when generating a recipe."""

    meal_type: str = "dinner"
    cuisine_preference: str = ""
    cooking_time: str = ""           # minutes, free text
    servings: int = 1
    excluded_ingredients: str = ""
    included_ingredients: str = ""
    spice_level: str = "mild"
    cooking_method: str = ""
    meal_prep_focus: bool = False
    refine: bool = False
    previous_recipe_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.servings < 1:
            raise ValueError(f"servings must be at least 1, got {self.servings}")


@dataclass
class GenerationContext:
    """Everything a generator may draw on for one recipe."""

    profile: UserProfile
    targets: NutritionTargets
    request: RecipeRequest
    consumed_calories: int = 0
    pantry_items: list[str] = field(default_factory=list)
    expiring_items: list[str] = field(default_factory=list)

    @property
    def remaining_calories(self) -> int:
        return self.targets.calorie_target - self.consumed_calories
