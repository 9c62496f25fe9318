"""Recipe generation: models, generators and prompt rendering."""

from pantrychef.recipes.generator import RecipeGenerator, TemplateRecipeGenerator
from pantrychef.recipes.models import (
    GeneratedRecipe,
    GenerationContext,
    NutritionalInfo,
    RecipeRequest,
)
from pantrychef.recipes.prompt import build_meal_plan_prompt, build_recipe_prompt

__all__ = [
    "GeneratedRecipe",
    "GenerationContext",
    "NutritionalInfo",
    "RecipeGenerator",
    "RecipeRequest",
    "TemplateRecipeGenerator",
    "build_meal_plan_prompt",
    "build_recipe_prompt",
]
