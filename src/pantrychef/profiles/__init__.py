"""Body profile and nutrition target calculation."""

from pantrychef.profiles.body_calc import (
    ActivityLevel,
    Gender,
    Goal,
    NutritionTargets,
    UserProfile,
    compute_targets,
)

__all__ = [
    "ActivityLevel",
    "Gender",
    "Goal",
    "NutritionTargets",
    "UserProfile",
    "compute_targets",
]
