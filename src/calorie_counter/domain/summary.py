"""Domain models for daily totals."""

from dataclasses import dataclass
from enum import Enum

from calorie_counter.domain.foods import FoodItem

NEAR_TARGET_THRESHOLD = 0.85


class ProgressStatus(str, Enum):
    """How close today's calories are to the target."""

    ON_TRACK = "on_track"
    NEAR_TARGET = "near_target"
    OVER_TARGET = "over_target"

    @classmethod
    def from_progress(cls, progress: float) -> "ProgressStatus":
        if progress >= 1.0:
            return cls.OVER_TARGET
        if progress >= NEAR_TARGET_THRESHOLD:
            return cls.NEAR_TARGET
        return cls.ON_TRACK


@dataclass(frozen=True)
class DailySummary:
    """Totals for one day against the calorie target."""

    day: str
    items: list[FoodItem]
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    target_kcal: int
    progress: float
    status: ProgressStatus
