"""Daily totals and history grouping for the food log."""

from collections.abc import Iterable
from datetime import datetime
from zoneinfo import ZoneInfo

from calorie_counter.domain.foods import FoodItem
from calorie_counter.domain.summary import DailySummary, ProgressStatus
from calorie_counter.services.macros import extract_amount

DATE_FORMAT = "%Y-%m-%d"


def today_stamp(timezone_name: str) -> str:
    """Return today's date stamp in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).strftime(DATE_FORMAT)


def entries_for_day(items: Iterable[FoodItem], day: str) -> list[FoodItem]:
    """Return entries logged on ``day``; undated entries always count."""
    return [item for item in items if item.date_stamp in (None, day)]


def summarize_day(
    items: Iterable[FoodItem], day: str, target_kcal: int
) -> DailySummary:
    """Sum the day's macros and compare calories against the target."""
    todays = entries_for_day(items, day)
    calories = sum(extract_amount(item.calories) for item in todays)
    progress = progress_ratio(calories, target_kcal)
    return DailySummary(
        day=day,
        items=todays,
        calories=calories,
        protein_g=sum(extract_amount(item.protein) for item in todays),
        carbs_g=sum(extract_amount(item.carbs) for item in todays),
        fat_g=sum(extract_amount(item.fat) for item in todays),
        target_kcal=target_kcal,
        progress=progress,
        status=ProgressStatus.from_progress(progress),
    )


def progress_ratio(calories: float, target_kcal: int) -> float:
    """Return calories over target clamped to [0, 1]."""
    if target_kcal <= 0:
        return 1.0 if calories > 0 else 0.0
    return min(max(calories / target_kcal, 0.0), 1.0)


def group_by_day(items: Iterable[FoodItem]) -> list[tuple[str, list[FoodItem]]]:
    """Group entries by date stamp, most recent day first.

    Entries keep their logged order within a day. Undated entries are grouped
    under an empty stamp and sort last.
    """
    groups: dict[str, list[FoodItem]] = {}
    for item in items:
        groups.setdefault(item.date_stamp or "", []).append(item)
    return sorted(groups.items(), key=lambda group: group[0], reverse=True)
