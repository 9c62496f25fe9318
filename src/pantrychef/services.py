"""Application services.

Each service receives its collaborators (database, event channel, clock,
recipe generator) through its constructor. Services validate input, talk
to the store through the query classes, run the pure calculation code and
publish an event after every write.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional, Union

from pantrychef.config.settings import Settings
from pantrychef.db.connection import DatabaseConnection
from pantrychef.db.queries import (
    MealLogQueries,
    MealPlanQueries,
    PantryQueries,
    ProfileQueries,
    RecipeQueries,
    WeightQueries,
)
from pantrychef.errors import InvalidEntryError, NotFoundError, TargetsNotEstablishedError
from pantrychef.events import (
    EventChannel,
    FavoritesChanged,
    MealLogged,
    MealPlanGenerated,
    PantryChanged,
    ProfileSaved,
    WeightLogged,
)
from pantrychef.planner.meal_allocator import DailyMealPlan, allocate
from pantrychef.profiles.body_calc import (
    ActivityLevel,
    Gender,
    Goal,
    NutritionTargets,
    UserProfile,
    compute_targets,
)
from pantrychef.recipes.generator import RecipeGenerator, TemplateRecipeGenerator
from pantrychef.recipes.models import GeneratedRecipe, GenerationContext, RecipeRequest
from pantrychef.tracking.insights import (
    DEFAULT_EXPIRING_WITHIN_DAYS,
    Insight,
    coaching_insights,
    daily_totals,
    expiring_items,
    is_recipe_logged_on,
    macro_progress,
    sort_pantry_items,
)
from pantrychef.tracking.models import (
    DailyTotals,
    LoggedMeal,
    PantryItem,
    RecipeFeedback,
    WeightEntry,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

MAX_RATING = 5


def _choices(enum_type) -> tuple[str, ...]:
    return tuple(member.value for member in enum_type)


def validate_profile(profile: UserProfile) -> None:
    """Reject profiles a user could not have entered.

    The target calculator itself accepts anything; this check guards what
    gets saved.
    """
    checks = [
        ("gender", profile.gender, _choices(Gender)),
        ("activity_level", profile.activity_level, _choices(ActivityLevel)),
        ("goal", profile.goal, _choices(Goal)),
    ]
    for field_name, value, valid in checks:
        if value not in valid:
            raise InvalidEntryError(
                f"{field_name} must be one of {valid}, got '{value}'", field=field_name
            )

    for field_name in ("weight", "height", "age"):
        if getattr(profile, field_name) < 0:
            raise InvalidEntryError(f"{field_name} cannot be negative", field=field_name)


class ProfileService:
    """Load and save the body profile; derive targets from it."""

    def __init__(self, db: DatabaseConnection, events: EventChannel):
        self.db = db
        self.events = events

    def get_profile(self) -> UserProfile:
        """Return the saved profile, saving a default one on first use."""
        with self.db.get_connection() as conn:
            profile = ProfileQueries.get_profile(conn)
            if profile is None:
                profile = UserProfile()
                profile.profile_id = ProfileQueries.save_profile(conn, profile)
                logger.info("Created default profile %s", profile.profile_id)
        return profile

    def save_profile(self, profile: UserProfile) -> NutritionTargets:
        """Validate and persist a profile, returning its fresh targets."""
        validate_profile(profile)
        if profile.profile_id is None:
            profile.profile_id = self.get_profile().profile_id

        with self.db.get_connection() as conn:
            ProfileQueries.save_profile(conn, profile)

        targets = compute_targets(profile)
        logger.info(
            "Saved profile %s (calorie target %d)",
            profile.profile_id,
            targets.calorie_target,
        )
        self.events.publish(ProfileSaved(profile=profile, targets=targets))
        return targets

    def get_targets(self) -> NutritionTargets:
        return compute_targets(self.get_profile())

    def require_targets(self) -> NutritionTargets:
        """Return targets, raising if the profile is incomplete."""
        targets = self.get_targets()
        if not targets.is_established:
            raise TargetsNotEstablishedError()
        return targets


class PantryService:
    """Manage pantry items."""

    def __init__(
        self,
        db: DatabaseConnection,
        events: EventChannel,
        clock: Clock = datetime.now,
        expiring_within_days: int = DEFAULT_EXPIRING_WITHIN_DAYS,
    ):
        self.db = db
        self.events = events
        self.clock = clock
        self.expiring_within_days = expiring_within_days

    def add_item(self, name: str, expiration_date: Optional[date] = None) -> PantryItem:
        name = name.strip()
        if not name:
            raise InvalidEntryError("Pantry item name cannot be empty.", field="name")

        with self.db.get_connection() as conn:
            item = PantryQueries.add_item(conn, name, self.clock(), expiration_date)
            count = len(PantryQueries.list_items(conn))

        logger.info("Added pantry item %s (%s)", item.item_id, item.name)
        self.events.publish(PantryChanged(item_count=count))
        return item

    def remove_item(self, item_id: int) -> None:
        with self.db.get_connection() as conn:
            removed = PantryQueries.remove_item(conn, item_id)
            count = len(PantryQueries.list_items(conn))

        if not removed:
            raise NotFoundError(f"No pantry item with id {item_id}")
        logger.info("Removed pantry item %s", item_id)
        self.events.publish(PantryChanged(item_count=count))

    def list_items(self) -> list[PantryItem]:
        with self.db.get_connection() as conn:
            items = PantryQueries.list_items(conn)
        return sort_pantry_items(items)

    def expiring_items(self, today: Optional[date] = None) -> list[PantryItem]:
        today = today or self.clock().date()
        return expiring_items(self.list_items(), today, self.expiring_within_days)


class MealLogService:
    """Record eaten meals and total them per day."""

    def __init__(self, db: DatabaseConnection, events: EventChannel, clock: Clock = datetime.now):
        self.db = db
        self.events = events
        self.clock = clock

    def _log(self, meal: LoggedMeal) -> LoggedMeal:
        with self.db.get_connection() as conn:
            MealLogQueries.log_meal(conn, meal)
        logger.info("Logged %s meal '%s' (%d kcal)", meal.source, meal.recipe_name, meal.calories)
        self.events.publish(MealLogged(meal=meal))
        return meal

    def log_manual(
        self, name: str, calories: int, protein: int = 0, carbs: int = 0, fat: int = 0
    ) -> LoggedMeal:
        name = name.strip()
        if not name:
            raise InvalidEntryError("Meal name cannot be empty.", field="name")
        for field_name, value in (
            ("calories", calories), ("protein", protein), ("carbs", carbs), ("fat", fat)
        ):
            if value < 0:
                raise InvalidEntryError(f"{field_name} cannot be negative", field=field_name)

        return self._log(LoggedMeal(
            log_id=None,
            recipe_name=name,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            logged_at=self.clock(),
            source="manual",
        ))

    def log_recipe(self, recipe: GeneratedRecipe) -> LoggedMeal:
        info = recipe.nutritional_info
        meal = self._log(LoggedMeal(
            log_id=None,
            recipe_name=recipe.recipe_name,
            calories=info.calories if info else 0,
            protein=info.protein_grams if info else 0,
            carbs=info.carbs_grams if info else 0,
            fat=info.fat_grams if info else 0,
            logged_at=self.clock(),
            source="generated",
            recipe_id=recipe.recipe_id,
        ))
        recipe.is_logged_today = True
        return meal

    def meals_for_day(self, day: Optional[date] = None) -> list[LoggedMeal]:
        day = day or self.clock().date()
        with self.db.get_connection() as conn:
            return MealLogQueries.get_meals_for_day(conn, day)

    def daily_totals(self, day: Optional[date] = None) -> DailyTotals:
        day = day or self.clock().date()
        return daily_totals(self.meals_for_day(day), day)

    def is_recipe_logged_today(self, recipe_id: Optional[str]) -> bool:
        today = self.clock().date()
        return is_recipe_logged_on(self.meals_for_day(today), recipe_id, today)


class WeightService:
    """Record body weight over time."""

    def __init__(self, db: DatabaseConnection, events: EventChannel, clock: Clock = datetime.now):
        self.db = db
        self.events = events
        self.clock = clock

    def add_weight(self, weight: float) -> WeightEntry:
        if weight <= 0:
            raise InvalidEntryError(
                "Please enter a valid weight (greater than 0).", field="weight"
            )
        with self.db.get_connection() as conn:
            entry = WeightQueries.add_weight(conn, weight, self.clock())
        logger.info("Logged weight %.1f kg", weight)
        self.events.publish(WeightLogged(entry=entry))
        return entry

    def history(self, limit: Optional[int] = None) -> list[WeightEntry]:
        with self.db.get_connection() as conn:
            return WeightQueries.get_weight_history(conn, limit=limit)


class RecipeService:
    """Generate recipes and manage favorites and feedback."""

    def __init__(
        self,
        db: DatabaseConnection,
        events: EventChannel,
        profiles: ProfileService,
        pantry: PantryService,
        meal_log: MealLogService,
        generator: RecipeGenerator,
        clock: Clock = datetime.now,
    ):
        self.db = db
        self.events = events
        self.profiles = profiles
        self.pantry = pantry
        self.meal_log = meal_log
        self.generator = generator
        self.clock = clock

    def build_context(self, request: RecipeRequest) -> GenerationContext:
        """Gather profile, targets, pantry and today's intake for a generator."""
        profile = self.profiles.get_profile()
        targets = compute_targets(profile)
        if not targets.is_established:
            raise TargetsNotEstablishedError()

        return GenerationContext(
            profile=profile,
            targets=targets,
            request=request,
            consumed_calories=self.meal_log.daily_totals().calories,
            pantry_items=[item.name for item in self.pantry.list_items()],
            expiring_items=[item.name for item in self.pantry.expiring_items()],
        )

    def generate_recipe(self, request: RecipeRequest) -> GeneratedRecipe:
        context = self.build_context(request)
        recipe = self.generator.generate(context)

        with self.db.get_connection() as conn:
            RecipeQueries.save_generated(conn, recipe)
            recipe.is_favorite = RecipeQueries.is_favorite(conn, recipe.recipe_id)
        recipe.is_logged_today = self.meal_log.is_recipe_logged_today(recipe.recipe_id)

        logger.info("Generated recipe '%s' (%s)", recipe.recipe_name, recipe.recipe_id)
        return recipe

    def get_recipe(self, recipe_id: str) -> GeneratedRecipe:
        """Look a recipe up among generated recipes and favorites."""
        with self.db.get_connection() as conn:
            recipe = RecipeQueries.get_generated(conn, recipe_id)
            if recipe is None:
                recipe = RecipeQueries.get_favorite(conn, recipe_id)
            if recipe is None:
                raise NotFoundError(f"No recipe with id {recipe_id}")
            recipe.is_favorite = RecipeQueries.is_favorite(conn, recipe_id)
        recipe.is_logged_today = self.meal_log.is_recipe_logged_today(recipe_id)
        return recipe

    def toggle_favorite(self, recipe: GeneratedRecipe) -> bool:
        """Flip a recipe's favorite status and return the new status."""
        with self.db.get_connection() as conn:
            if RecipeQueries.is_favorite(conn, recipe.recipe_id):
                RecipeQueries.remove_favorite(conn, recipe.recipe_id)
                recipe.is_favorite = False
            else:
                RecipeQueries.save_favorite(conn, recipe)
                recipe.is_favorite = True

        logger.info(
            "Recipe %s %s favorites",
            recipe.recipe_id,
            "added to" if recipe.is_favorite else "removed from",
        )
        self.events.publish(
            FavoritesChanged(recipe_id=recipe.recipe_id, is_favorite=recipe.is_favorite)
        )
        return recipe.is_favorite

    def favorites(self) -> list[GeneratedRecipe]:
        with self.db.get_connection() as conn:
            return RecipeQueries.list_favorites(conn)

    def submit_feedback(
        self, recipe: GeneratedRecipe, rating: int = 0, feedback: str = ""
    ) -> RecipeFeedback:
        feedback = feedback.strip()
        if rating <= 0 and not feedback:
            raise InvalidEntryError(
                "Please provide a rating or feedback before submitting."
            )
        if not 0 <= rating <= MAX_RATING:
            raise InvalidEntryError(
                f"rating must be between 0 and {MAX_RATING}, got {rating}", field="rating"
            )

        with self.db.get_connection() as conn:
            entry = RecipeQueries.add_feedback(conn, RecipeFeedback(
                feedback_id=None,
                recipe_id=recipe.recipe_id,
                recipe_name=recipe.recipe_name,
                rating=rating,
                feedback=feedback,
                submitted_at=self.clock(),
            ))
        logger.info("Feedback %s recorded for recipe %s", entry.feedback_id, recipe.recipe_id)
        return entry


class MealPlanService:
    """Generate and store daily meal plans."""

    def __init__(
        self,
        db: DatabaseConnection,
        events: EventChannel,
        profiles: ProfileService,
        clock: Clock = datetime.now,
    ):
        self.db = db
        self.events = events
        self.profiles = profiles
        self.clock = clock

    def generate_daily_plan(
        self, plan_date: Union[date, str, None] = None
    ) -> DailyMealPlan:
        targets = self.profiles.require_targets()
        plan = allocate(targets, plan_date or self.clock().date())

        with self.db.get_connection() as conn:
            MealPlanQueries.save_plan(conn, plan)

        logger.info("Generated meal plan for %s (%d kcal)", plan.date, plan.total_calories)
        self.events.publish(MealPlanGenerated(plan=plan))
        return plan

    def get_plan(self, plan_date: Optional[date] = None) -> Optional[DailyMealPlan]:
        plan_date = plan_date or self.clock().date()
        with self.db.get_connection() as conn:
            return MealPlanQueries.get_plan(conn, plan_date)


class InsightService:
    """Compose the dashboard view: totals, progress and coaching messages."""

    def __init__(
        self,
        profiles: ProfileService,
        pantry: PantryService,
        meal_log: MealLogService,
        weights: WeightService,
        clock: Clock = datetime.now,
    ):
        self.profiles = profiles
        self.pantry = pantry
        self.meal_log = meal_log
        self.weights = weights
        self.clock = clock

    def insights(self, day: Optional[date] = None) -> list[Insight]:
        day = day or self.clock().date()
        profile = self.profiles.get_profile()
        return coaching_insights(
            targets=compute_targets(profile),
            totals=self.meal_log.daily_totals(day),
            goal=profile.goal,
            expiring=self.pantry.expiring_items(day),
            weight_history=self.weights.history(),
        )

    def dashboard(self, day: Optional[date] = None) -> dict:
        day = day or self.clock().date()
        targets = self.profiles.get_targets()
        totals = self.meal_log.daily_totals(day)
        return {
            "date": day.isoformat(),
            "targets": targets.to_dict(),
            "consumed": totals.to_dict(),
            "progress": macro_progress(totals, targets),
            "insights": [
                {"kind": i.kind, "level": i.level, "message": i.message}
                for i in self.insights(day)
            ],
        }


@dataclass
class Services:
    """All services wired to one database and event channel."""

    db: DatabaseConnection
    settings: Settings
    events: EventChannel
    profiles: ProfileService
    pantry: PantryService
    meal_log: MealLogService
    weights: WeightService
    recipes: RecipeService
    plans: MealPlanService
    insights: InsightService

    @classmethod
    def create(
        cls,
        db: DatabaseConnection,
        settings: Optional[Settings] = None,
        events: Optional[EventChannel] = None,
        generator: Optional[RecipeGenerator] = None,
        clock: Clock = datetime.now,
    ) -> "Services":
        settings = settings or Settings()
        events = events or EventChannel()
        if generator is None:
            generator = TemplateRecipeGenerator(random.Random(settings.generation.seed))

        profiles = ProfileService(db, events)
        pantry = PantryService(
            db, events, clock, expiring_within_days=settings.pantry.expiring_within_days
        )
        meal_log = MealLogService(db, events, clock)
        weights = WeightService(db, events, clock)
        return cls(
            db=db,
            settings=settings,
            events=events,
            profiles=profiles,
            pantry=pantry,
            meal_log=meal_log,
            weights=weights,
            recipes=RecipeService(db, events, profiles, pantry, meal_log, generator, clock),
            plans=MealPlanService(db, events, profiles, clock),
            insights=InsightService(profiles, pantry, meal_log, weights, clock),
        )
