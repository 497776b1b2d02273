"""Profile and food log persistence on top of a key-value namespace."""

from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter

from calorie_counter.domain.foods import FoodItem
from calorie_counter.domain.profile import UserProfile

PROFILE_KEY = "user_profile"
# Bumped from "daily_log" when entries gained a date stamp.
FOOD_LOG_KEY = "daily_log_v3"

_PROFILE_ADAPTER = TypeAdapter(UserProfile)
_FOOD_LOG_ADAPTER = TypeAdapter(list[FoodItem])


class KeyValueStore(Protocol):
    """String key-value storage scoped to one application namespace."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if any."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


@dataclass
class ProfileStore:
    """Persists the single user profile."""

    store: KeyValueStore

    def load(self) -> UserProfile | None:
        raw = self.store.get(PROFILE_KEY)
        if raw is None:
            return None
        return _PROFILE_ADAPTER.validate_json(raw)

    def save(self, profile: UserProfile) -> None:
        self.store.set(PROFILE_KEY, _PROFILE_ADAPTER.dump_json(profile).decode())

    def clear(self) -> None:
        self.store.delete(PROFILE_KEY)


@dataclass
class FoodLogStore:
    """Persists the ordered list of food entries."""

    store: KeyValueStore

    def load(self) -> list[FoodItem]:
        raw = self.store.get(FOOD_LOG_KEY)
        if raw is None:
            return []
        return _FOOD_LOG_ADAPTER.validate_json(raw)

    def save(self, items: list[FoodItem]) -> None:
        self.store.set(FOOD_LOG_KEY, _FOOD_LOG_ADAPTER.dump_json(items).decode())
