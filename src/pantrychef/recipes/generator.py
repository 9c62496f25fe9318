"""Recipe generators.

A generator turns a GenerationContext into a GeneratedRecipe. The
TemplateRecipeGenerator fills a fixed recipe shape with randomly chosen
ingredients; a model-backed generator can replace it without touching the
target calculation or meal planning code.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol

from pantrychef.recipes.models import (
    GeneratedRecipe,
    GenerationContext,
    NutritionalInfo,
)

PROTEIN_SOURCES = ["chicken breast", "firm tofu", "lean ground beef", "canned chickpeas"]
VEGETABLES = ["mixed vegetables", "bell pepper strips", "spinach", "zucchini slices"]
COOKING_OILS = ["olive oil", "coconut oil", "avocado oil"]
SEASONINGS = ["garlic powder", "smoked paprika", "cumin", "Italian seasoning"]
GRAINS = ["quinoa", "brown rice", "cauliflower rice", "whole wheat pasta"]

PREP_MINUTES = (10, 20)
COOK_MINUTES = (20, 40)
PROTEIN_GRAMS_PER_SERVING = (150, 250)

# (floor, per-serving cap) for the nutrition clamps
CALORIE_CLAMP = (100, 500)
PROTEIN_CLAMP = (5, 30)
CARBS_CLAMP = (10, 50)
FAT_CLAMP = (5, 20)


class RecipeGenerator(Protocol):
    """Anything that can produce a recipe from a generation context."""

    def generate(self, context: GenerationContext) -> GeneratedRecipe:
        ...


def _clamp(target: int, bounds: tuple[int, int], servings: int) -> int:
    floor, per_serving = bounds
    return max(floor, min(target, per_serving * servings))


def _or_default(value: str, default: str) -> str:
    return value if value.strip() else default


class TemplateRecipeGenerator:
    """Fill a fixed recipe template with randomly selected ingredients.

    Pass a seeded ``random.Random`` for reproducible output.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate(self, context: GenerationContext) -> GeneratedRecipe:
        request = context.request
        targets = context.targets
        servings = request.servings

        cuisine = _or_default(request.cuisine_preference, "Delicious")
        method = _or_default(request.cooking_method, "any")
        recipe_name = (
            f"{request.spice_level.title()} {cuisine.title()} "
            f"{request.meal_type.title()} Dish"
        )
        description = (
            f"A simple, flavorful dish for {servings} serving(s), prepared "
            f"using the {method.title()} method."
        )
        if request.meal_prep_focus:
            description += " Great for meal prep!"

        protein_grams = self.rng.randint(*PROTEIN_GRAMS_PER_SERVING) * servings
        ingredients = [
            f"{protein_grams}g {self.rng.choice(PROTEIN_SOURCES)}",
            f"{servings} cup {self.rng.choice(VEGETABLES)}",
            f"{servings} tbsp {self.rng.choice(COOKING_OILS)}",
            f"{servings} tsp {self.rng.choice(SEASONINGS)}",
            f"{servings} cup cooked {self.rng.choice(GRAINS)}",
            f"{servings} pinch of salt and pepper",
        ]
        instructions = [
            "Heat oil in pan. Add protein and cook.",
            "Add vegetables and seasoning, stir-fry until tender.",
            f"Return protein to the pan. Sprinkle with {servings} tsp seasoning "
            "blend, salt and pepper. Toss to combine.",
            f"Serve immediately over {servings} cup cooked grain. "
            f"Enjoy your {request.spice_level} dish!",
        ]

        nutrition = NutritionalInfo(
            calories=_clamp(context.remaining_calories, CALORIE_CLAMP, servings),
            protein_grams=_clamp(targets.protein_target, PROTEIN_CLAMP, servings),
            carbs_grams=_clamp(targets.carb_target, CARBS_CLAMP, servings),
            fat_grams=_clamp(targets.fat_target, FAT_CLAMP, servings),
        )

        notes = (
            "Generated from a recipe template. "
            f"Exclusions: {_or_default(request.excluded_ingredients, 'None')}. "
            f"Inclusions: {_or_default(request.included_ingredients, 'None')}."
        )

        return GeneratedRecipe(
            recipe_name=recipe_name,
            description=description,
            prep_time_minutes=self.rng.randint(*PREP_MINUTES),
            cook_time_minutes=self.rng.randint(*COOK_MINUTES),
            servings=servings,
            ingredients=ingredients,
            instructions=instructions,
            nutritional_info=nutrition,
            notes=notes,
        )
