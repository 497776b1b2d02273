"""Tests for profile and food log persistence."""

import json
from pathlib import Path

from calorie_counter.adapters.json_file_store import JsonFileKeyValueStore
from calorie_counter.domain.foods import FoodItem, MealCategory
from calorie_counter.services.storage import (
    FOOD_LOG_KEY,
    PROFILE_KEY,
    FoodLogStore,
    ProfileStore,
)
from tests.conftest import SAMPLE_PROFILE, InMemoryKeyValueStore

LOG = [
    FoodItem(
        id=1_700_000_000_000_000_001,
        name="Fried Egg",
        calories="135",
        protein="12.5g",
        carbs="1.2g",
        fat="10g",
        meal_category=MealCategory.BREAKFAST,
        date_stamp="2024-01-01",
    ),
    FoodItem(
        id=1_700_000_000_000_000_002,
        name="Tea",
        calories="~30",
        protein="0g",
        carbs="7g",
        fat="0g",
        meal_category=MealCategory.SNACK,
    ),
]


def test_food_log_roundtrip() -> None:
    kv = InMemoryKeyValueStore()
    store = FoodLogStore(kv)

    store.save(LOG)

    assert store.load() == LOG
    stored = json.loads(kv.values[FOOD_LOG_KEY])
    assert stored[0]["meal_category"] == "Breakfast"
    assert stored[1]["date_stamp"] is None


def test_food_log_defaults_to_empty() -> None:
    assert FoodLogStore(InMemoryKeyValueStore()).load() == []


def test_profile_save_load_clear() -> None:
    kv = InMemoryKeyValueStore()
    store = ProfileStore(kv)

    assert store.load() is None
    store.save(SAMPLE_PROFILE)
    assert store.load() == SAMPLE_PROFILE
    assert json.loads(kv.values[PROFILE_KEY])["daily_calorie_target_kcal"] == 2000

    store.clear()
    assert store.load() is None


def test_json_file_store_persists_across_instances(tmp_path: Path) -> None:
    store = JsonFileKeyValueStore.create(str(tmp_path / "nested"), "CalorieApp")
    FoodLogStore(store).save(LOG)
    ProfileStore(store).save(SAMPLE_PROFILE)

    reopened = JsonFileKeyValueStore.create(str(tmp_path / "nested"), "CalorieApp")

    assert (tmp_path / "nested" / "CalorieApp.json").exists()
    assert FoodLogStore(reopened).load() == LOG
    assert ProfileStore(reopened).load() == SAMPLE_PROFILE


def test_json_file_store_delete_missing_key_is_noop(tmp_path: Path) -> None:
    store = JsonFileKeyValueStore(path=tmp_path / "state.json")

    store.delete("user_profile")

    assert store.get("user_profile") is None
    assert not (tmp_path / "state.json").exists()
