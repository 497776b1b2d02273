"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import Enum


class ActivityLevel(float, Enum):
    """Fixed activity multipliers applied to the basal metabolic rate."""

    SEDENTARY = 1.2
    LIGHT = 1.375
    MODERATE = 1.55
    ACTIVE = 1.725

    @property
    def label(self) -> str:
        return _ACTIVITY_LABELS[self]


_ACTIVITY_LABELS = {
    ActivityLevel.SEDENTARY: "Sedentary (Desk Job)",
    ActivityLevel.LIGHT: "Light (1-3 days/wk)",
    ActivityLevel.MODERATE: "Moderate (3-5 days/wk)",
    ActivityLevel.ACTIVE: "Active (Heavy lifting)",
}


@dataclass(frozen=True)
class UserProfile:
    """Body metrics and the daily calorie target derived from them."""

    weight_kg: float
    height_cm: float
    age: int
    is_male: bool
    activity_factor: float
    daily_calorie_target_kcal: int
