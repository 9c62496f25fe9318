"""Body profile calculator for daily calorie and macro targets.

Calculates BMR, TDEE and the resulting calorie/macro targets from a user's
body metrics, activity level and weight goal.

BMR uses the Harris-Benedict style constants (66.5 / 655.1 base, 13.7 per kg,
5.0 per cm, 6.75 per year). Targets are a pure function of the profile: they
are recomputed on every profile change and never edited in place. A profile
missing weight, height or age yields all-zero targets, which downstream code
reads as "targets not yet established".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Gender(Enum):
    """Gender for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level for TDEE calculation."""
    SEDENTARY = "sedentary"                  # Little or no exercise
    LIGHTLY_ACTIVE = "lightly_active"        # Light exercise 1-3 days/week
    MODERATELY_ACTIVE = "moderately_active"  # Moderate exercise 3-5 days/week
    VERY_ACTIVE = "very_active"              # Hard exercise 6-7 days/week
    EXTRA_ACTIVE = "extra_active"            # Very hard exercise, physical job


class Goal(Enum):
    """Body weight goal."""
    MAINTAIN = "maintain"
    LOSE = "lose"
    GAIN = "gain"


BMR_MEN_CONST = 66.5
BMR_WOMEN_CONST = 655.1
BMR_WEIGHT_MULTIPLIER = 13.7
BMR_HEIGHT_MULTIPLIER = 5.0
BMR_AGE_MULTIPLIER = 6.75

# Keyed by the stored string value so unknown levels fall through to the default
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE.value: 1.375,
    ActivityLevel.MODERATELY_ACTIVE.value: 1.55,
    ActivityLevel.VERY_ACTIVE.value: 1.725,
    ActivityLevel.EXTRA_ACTIVE.value: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

GOAL_CALORIE_DELTA = 500
MIN_LOSS_CALORIES = 1200

# (share of calories, kcal per gram)
MACRO_SPLIT = {
    "protein": (0.25, 4),
    "carbs": (0.45, 4),
    "fat": (0.30, 9),
}


@dataclass
class UserProfile:
    """Body metrics and preferences a user saves in their profile."""

    weight: float = 0.0          # kg
    height: float = 0.0          # cm
    age: int = 0                 # years
    gender: str = "male"         # 'male' or 'female'
    activity_level: str = "sedentary"
    goal: str = "maintain"       # 'maintain', 'lose', 'gain'
    dietary_restrictions: str = ""  # e.g. "vegetarian, gluten-free"
    profile_id: Optional[int] = None

    def has_body_metrics(self) -> bool:
        """Return True when weight, height and age are all set."""
        return self.weight > 0 and self.height > 0 and self.age > 0


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets derived from a profile."""

    calorie_target: int = 0
    protein_target: int = 0   # grams
    carb_target: int = 0      # grams
    fat_target: int = 0       # grams

    @property
    def is_established(self) -> bool:
        """Zero calories is the sentinel for an incomplete profile."""
        return self.calorie_target > 0

    def to_dict(self) -> dict:
        return {
            "calorie_target": self.calorie_target,
            "protein_target": self.protein_target,
            "carb_target": self.carb_target,
            "fat_target": self.fat_target,
        }

    def summary(self) -> str:
        """Human-readable summary of targets."""
        if not self.is_established:
            return "Targets not established (set weight, height and age)"
        return "\n".join([
            f"Calories: {self.calorie_target} kcal/day",
            f"Protein: {self.protein_target}g/day",
            f"Carbs: {self.carb_target}g/day",
            f"Fat: {self.fat_target}g/day",
        ])


ZERO_TARGETS = NutritionTargets()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    The builtin round() uses banker's rounding, which would turn 2.5 into 2.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def calculate_bmr(weight: float, height: float, age: int, gender: str) -> float:
    """Calculate Basal Metabolic Rate.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        gender: "male"; any other value uses the female constant

    Returns:
        BMR in calories per day
    """
    base = BMR_MEN_CONST if gender == Gender.MALE.value else BMR_WOMEN_CONST
    return (
        base
        + BMR_WEIGHT_MULTIPLIER * weight
        + BMR_HEIGHT_MULTIPLIER * height
        - BMR_AGE_MULTIPLIER * age
    )


def calculate_tdee(bmr: float, activity_level: str) -> float:
    """Scale BMR by the activity multiplier (unknown levels use 1.2)."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    return bmr * multiplier


def apply_goal_adjustment(tdee: float, goal: str) -> float:
    """Apply the goal's calorie deficit or surplus to TDEE.

    Weight loss never drops below 1200 kcal no matter what the deficit
    math says. Unknown goals are treated as maintenance.
    """
    if goal == Goal.LOSE.value:
        return max(MIN_LOSS_CALORIES, tdee - GOAL_CALORIE_DELTA)
    if goal == Goal.GAIN.value:
        return tdee + GOAL_CALORIE_DELTA
    return tdee


def split_macros(target_calories: float) -> tuple[int, int, int]:
    """Split calories into (protein, carbs, fat) grams.

    Each macro is rounded on its own; their caloric sum can drift a few
    kcal from the calorie target and that drift is left alone.
    """
    grams = []
    for share, kcal_per_gram in MACRO_SPLIT.values():
        grams.append(round_half_up(target_calories * share / kcal_per_gram))
    protein, carbs, fat = grams
    return protein, carbs, fat


def compute_targets(profile: UserProfile) -> NutritionTargets:
    """Calculate daily calorie and macro targets for a profile.

    Never raises. Profiles without positive weight, height and age get
    all-zero targets.

    Args:
        profile: The user's body profile

    Returns:
        NutritionTargets with integer calories and gram targets
    """
    if not profile.has_body_metrics():
        return ZERO_TARGETS

    bmr = calculate_bmr(profile.weight, profile.height, profile.age, profile.gender)
    tdee = calculate_tdee(bmr, profile.activity_level)
    target_calories = apply_goal_adjustment(tdee, profile.goal)
    protein, carbs, fat = split_macros(target_calories)

    return NutritionTargets(
        calorie_target=round_half_up(target_calories),
        protein_target=protein,
        carb_target=carbs,
        fat_target=fat,
    )


def targets_to_dict(profile: UserProfile, targets: NutritionTargets) -> dict:
    """Convert a profile and its targets to a dict for JSON output."""
    reference = None
    if profile.has_body_metrics():
        bmr = calculate_bmr(profile.weight, profile.height, profile.age, profile.gender)
        reference = {
            "bmr": round_half_up(bmr),
            "tdee": round_half_up(calculate_tdee(bmr, profile.activity_level)),
        }

    return {
        "targets": targets.to_dict(),
        "established": targets.is_established,
        "reference": reference,
        "profile": {
            "weight_kg": profile.weight,
            "height_cm": profile.height,
            "age": profile.age,
            "gender": profile.gender,
            "activity_level": profile.activity_level,
            "goal": profile.goal,
        },
    }
