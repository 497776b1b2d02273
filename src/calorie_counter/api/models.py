"""Pydantic models for API request bodies."""

from typing import Literal

from pydantic import BaseModel, Field

from calorie_counter.domain.foods import MealCategory
from calorie_counter.domain.profile import ActivityLevel


class ManualProfileRequest(BaseModel):
    """Onboarding with a user-entered calorie target."""

    target: str


class ComputedProfileRequest(BaseModel):
    """Onboarding from body metrics, as typed into the form."""

    weight: str
    height: str
    age: str
    is_male: bool = True
    activity: ActivityLevel = ActivityLevel.SEDENTARY


class AddFoodRequest(BaseModel):
    """Free-text food description with an optional base64 photo."""

    description: str = ""
    meal_category: MealCategory
    image: str | None = Field(default=None, description="Base64-encoded image")


class ExportRequest(BaseModel):
    """Export written to a destination path on the server."""

    destination: str
    kind: Literal["history", "daily"] = "history"
