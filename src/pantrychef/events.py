"""In-process event channel.

Services publish an event after every write so that views (or tests) can
react to changes without polling the store. Handlers run synchronously, in
subscription order, on the publishing thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type, TypeVar

from pantrychef.planner.meal_allocator import DailyMealPlan
from pantrychef.profiles.body_calc import NutritionTargets, UserProfile
from pantrychef.tracking.models import LoggedMeal, WeightEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """Base class for published events."""


@dataclass(frozen=True)
class ProfileSaved(Event):
    profile: UserProfile
    targets: NutritionTargets


@dataclass(frozen=True)
class PantryChanged(Event):
    item_count: int


@dataclass(frozen=True)
class MealLogged(Event):
    meal: LoggedMeal


@dataclass(frozen=True)
class WeightLogged(Event):
    entry: WeightEntry


@dataclass(frozen=True)
class FavoritesChanged(Event):
    recipe_id: str
    is_favorite: bool


@dataclass(frozen=True)
class MealPlanGenerated(Event):
    plan: DailyMealPlan


TEvent = TypeVar("TEvent", bound=Event)
Handler = Callable[[Any], None]


class EventChannel:
    """Synchronous publish/subscribe keyed by event type.

    A failing handler is logged and does not stop the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[Event], List[Handler]] = {}

    def subscribe(
        self, event_type: Type[TEvent], handler: Callable[[TEvent], None]
    ) -> Callable[[], None]:
        """Register a handler and return a callable that unsubscribes it."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Subscribed %r to %s", handler, event_type.__name__)

        def unsubscribe() -> None:
            self.unsubscribe(event_type, handler)

        return unsubscribe

    def unsubscribe(self, event_type: Type[TEvent], handler: Callable[[TEvent], None]) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: Event) -> None:
        handlers = list(self._handlers.get(type(event), []))
        if not handlers:
            return

        logger.debug("Publishing %s to %d handler(s)", type(event).__name__, len(handlers))
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %r failed for %s", handler, type(event).__name__
                )

    def handler_count(self, event_type: Type[Event]) -> int:
        return len(self._handlers.get(event_type, []))
