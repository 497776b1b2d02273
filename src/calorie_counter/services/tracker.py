"""Application state and the actions that drive it."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from calorie_counter.domain.foods import FoodItem, MealCategory
from calorie_counter.domain.profile import UserProfile
from calorie_counter.domain.summary import DailySummary
from calorie_counter.services.errors import (
    FoodEstimationError,
    FoodLogSaveError,
    RequestInProgressError,
)
from calorie_counter.services.estimation import FoodEstimationService
from calorie_counter.services.export import format_daily_log, format_full_history
from calorie_counter.services.ids import MonotonicIdFactory
from calorie_counter.services.parser import parse_food_lines
from calorie_counter.services.storage import FoodLogStore, ProfileStore
from calorie_counter.services.summary import group_by_day, summarize_day, today_stamp

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    """Which view the app is showing."""

    ONBOARDING = "onboarding"
    TRACKING = "tracking"
    HISTORY = "history"


class RequestState(str, Enum):
    """Whether a food estimation is outstanding."""

    IDLE = "idle"
    REQUESTING = "requesting"


@dataclass
class TrackerState:
    """In-memory copy of everything the screens render."""

    profile: UserProfile | None = None
    food_log: list[FoodItem] = field(default_factory=list)
    request_state: RequestState = RequestState.IDLE
    show_history: bool = False

    @property
    def screen(self) -> Screen:
        if self.profile is None:
            return Screen.ONBOARDING
        if self.show_history:
            return Screen.HISTORY
        return Screen.TRACKING


@dataclass
class TrackerController:
    """Owns the tracker state; every mutation is persisted immediately."""

    profile_store: ProfileStore
    food_log_store: FoodLogStore
    estimation_service: FoodEstimationService
    timezone: str = "UTC"
    id_factory: MonotonicIdFactory = field(default_factory=MonotonicIdFactory)
    state: TrackerState = field(default_factory=TrackerState)

    def load(self) -> TrackerState:
        """Read the profile and food log from storage."""
        self.state.profile = self.profile_store.load()
        self.state.food_log = self.food_log_store.load()
        for item in self.state.food_log:
            self.id_factory.observe(item.id)
        logger.info(
            "Loaded tracker state",
            extra={
                "has_profile": self.state.profile is not None,
                "entries": len(self.state.food_log),
            },
        )
        return self.state

    @property
    def screen(self) -> Screen:
        return self.state.screen

    def today(self) -> str:
        return today_stamp(self.timezone)

    def complete_onboarding(self, profile: UserProfile) -> None:
        """Store a new profile and switch to tracking."""
        self.profile_store.save(profile)
        self.state.profile = profile

    def edit_profile(self) -> None:
        """Forget the profile so onboarding runs again."""
        self.profile_store.clear()
        self.state.profile = None
        self.state.show_history = False

    def open_history(self) -> None:
        if self.state.profile is not None:
            self.state.show_history = True

    def close_history(self) -> None:
        self.state.show_history = False

    async def add_food(
        self,
        description: str,
        meal_category: MealCategory,
        image_bytes: bytes | None = None,
    ) -> list[FoodItem]:
        """Estimate a description, then log the parsed entries under today.

        Returns an empty list without calling the model when there is neither a
        description nor an image. A failed estimation leaves the log untouched.
        """
        if not description.strip() and not image_bytes:
            return []
        if self.state.request_state is RequestState.REQUESTING:
            raise RequestInProgressError("A food estimate is already in progress.")

        self.state.request_state = RequestState.REQUESTING
        try:
            try:
                response_text = await self.estimation_service.estimate(
                    description, image_bytes
                )
            except Exception as exc:
                logger.exception(
                    "Food estimation failed",
                    extra={"meal_category": meal_category.value},
                )
                raise FoodEstimationError(str(exc) or type(exc).__name__) from exc
            new_items = parse_food_lines(
                response_text, meal_category, self.today(), self.id_factory
            )
            updated = [*self.state.food_log, *new_items]
            try:
                self.food_log_store.save(updated)
            except Exception as exc:
                logger.exception(
                    "Failed to save food log", extra={"entries": len(updated)}
                )
                raise FoodLogSaveError(str(exc) or type(exc).__name__) from exc
            self.state.food_log = updated
        finally:
            self.state.request_state = RequestState.IDLE
        return new_items

    def delete_food(self, item_id: int) -> bool:
        """Remove an entry by id; returns False when nothing matched."""
        updated = [item for item in self.state.food_log if item.id != item_id]
        if len(updated) == len(self.state.food_log):
            return False
        self.food_log_store.save(updated)
        self.state.food_log = updated
        return True

    def today_summary(self) -> DailySummary | None:
        """Return today's totals, or None before onboarding."""
        if self.state.profile is None:
            return None
        return summarize_day(
            self.state.food_log,
            self.today(),
            self.state.profile.daily_calorie_target_kcal,
        )

    def history(self) -> list[tuple[str, list[FoodItem]]]:
        return group_by_day(self.state.food_log)

    def export_full_history(self) -> bytes:
        return format_full_history(self.state.food_log)

    def export_daily_log(self) -> bytes:
        return format_daily_log(self.state.food_log, self.today())
