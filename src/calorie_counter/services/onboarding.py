"""Daily calorie target calculation from body metrics."""

import math

from calorie_counter.domain.profile import ActivityLevel, UserProfile

MALE_OFFSET = 5
FEMALE_OFFSET = -161


def mifflin_st_jeor_bmr(
    weight_kg: float, height_cm: float, age: int, is_male: bool
) -> float:
    """Basal metabolic rate per the Mifflin-St Jeor equation."""
    offset = MALE_OFFSET if is_male else FEMALE_OFFSET
    return (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + offset


def daily_target(bmr: float, activity: ActivityLevel) -> int:
    """Scale BMR by the activity multiplier, rounding halves up."""
    return math.floor(bmr * activity.value + 0.5)


def build_computed_profile(
    weight: str, height: str, age: str, is_male: bool, activity: ActivityLevel
) -> UserProfile | None:
    """Build a profile from raw form input; None when any field is invalid."""
    weight_kg = _parse_float(weight)
    height_cm = _parse_float(height)
    age_years = _parse_int(age)
    if weight_kg is None or height_cm is None or age_years is None:
        return None
    bmr = mifflin_st_jeor_bmr(weight_kg, height_cm, age_years, is_male)
    return UserProfile(
        weight_kg=weight_kg,
        height_cm=height_cm,
        age=age_years,
        is_male=is_male,
        activity_factor=activity.value,
        daily_calorie_target_kcal=daily_target(bmr, activity),
    )


def build_manual_profile(target: str) -> UserProfile | None:
    """Build a profile carrying only a user-entered calorie target."""
    target_kcal = _parse_int(target)
    if target_kcal is None:
        return None
    return UserProfile(
        weight_kg=0.0,
        height_cm=0.0,
        age=0,
        is_male=True,
        activity_factor=0.0,
        daily_calorie_target_kcal=target_kcal,
    )


def _parse_float(raw: str) -> float | None:
    cleaned = raw.strip()
    if not _is_plain_number(cleaned):
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse_int(raw: str) -> int | None:
    cleaned = raw.strip()
    if not _is_plain_number(cleaned):
        return None
    try:
        return int(cleaned)
    except ValueError:
        return None


def _is_plain_number(raw: str) -> bool:
    """ASCII only, no digit-group underscores."""
    return raw.isascii() and "_" not in raw
