"""Domain models for logged food entries."""

from dataclasses import dataclass
from enum import Enum


class MealCategory(str, Enum):
    """Meal buckets, in display and export order."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class FoodItem:
    """A single food entry as estimated by the model.

    Macro fields keep the model's raw text (for example ``"10g"``) and are only
    converted to numbers when totals are computed.
    """

    id: int
    name: str
    calories: str
    protein: str
    carbs: str
    fat: str
    meal_category: MealCategory
    date_stamp: str | None = None
