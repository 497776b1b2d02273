"""CSV exports of the food log."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from calorie_counter.domain.foods import FoodItem, MealCategory
from calorie_counter.services.errors import ExportDestinationError, ExportError
from calorie_counter.services.summary import entries_for_day

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv"
FULL_HISTORY_FILENAME = "calorie_full_history.csv"
DAILY_LOG_FILENAME = "daily_log.csv"
FULL_HISTORY_HEADER = (
    "Date",
    "Meal",
    "Food Item",
    "Calories",
    "Protein",
    "Carbs",
    "Fat",
)
DAILY_LOG_HEADER = ("Meal", "Food Item", "Calories", "Protein", "Carbs", "Fat")
PLACEHOLDER_NAME = "Not Entered"
EXPORT_DIR = "exports"


def format_full_history(items: Iterable[FoodItem]) -> bytes:
    """Render every entry, most recent date first."""
    ordered = sorted(items, key=lambda item: item.date_stamp or "", reverse=True)
    rows = [FULL_HISTORY_HEADER]
    rows.extend(
        (
            item.date_stamp or "",
            item.meal_category.value,
            item.name,
            item.calories,
            item.protein,
            item.carbs,
            item.fat,
        )
        for item in ordered
    )
    return _render(rows)


def format_daily_log(items: Iterable[FoodItem], day: str) -> bytes:
    """Render one day's entries plus a placeholder for each empty meal."""
    todays = entries_for_day(items, day)
    rows = [DAILY_LOG_HEADER]
    rows.extend(
        (
            item.meal_category.value,
            item.name,
            item.calories,
            item.protein,
            item.carbs,
            item.fat,
        )
        for item in todays
    )
    logged = {item.meal_category for item in todays}
    for meal in MealCategory:
        if meal not in logged:
            rows.append((meal.value, PLACEHOLDER_NAME, "0", "0", "0", "0"))
    return _render(rows)


def _render(rows: list[tuple[str, ...]]) -> bytes:
    return "".join(",".join(row) + "\n" for row in rows).encode("utf-8")


@dataclass
class ExportService:
    """Writes rendered exports into a dedicated export directory."""

    root: Path

    def save(self, destination: str, content: bytes) -> Path:
        """Write the export under ``root`` and return the written path.

        Destinations that resolve outside ``root`` are rejected with
        ``ExportError``, as are I/O failures.
        """
        target = self._resolve(destination)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            logger.exception(
                "Failed to write export", extra={"destination": str(target)}
            )
            raise ExportError(ExportError.user_message) from exc
        return target

    def _resolve(self, destination: str) -> Path:
        root = self.root.resolve()
        target = (root / destination).resolve()
        if target == root or not target.is_relative_to(root):
            logger.warning(
                "Rejected export destination", extra={"destination": destination}
            )
            raise ExportDestinationError(ExportError.user_message)
        return target
