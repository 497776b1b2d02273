"""Parsing of the model's CSV-like food estimates."""

import logging

from calorie_counter.domain.foods import FoodItem, MealCategory
from calorie_counter.services.ids import IdFactory

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ","
REQUIRED_FIELDS = 5


def parse_food_lines(
    text: str,
    meal_category: MealCategory,
    date_stamp: str | None,
    id_factory: IdFactory,
) -> list[FoodItem]:
    """Turn ``Name,Calories,Protein,Carbs,Fat`` lines into food items.

    Lines with fewer than five fields are dropped. Extra fields are ignored and
    macro values are kept as-is.
    """
    items: list[FoodItem] = []
    for line in text.splitlines():
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < REQUIRED_FIELDS:
            if line.strip():
                logger.debug("Dropping unparseable model line: %r", line)
            continue
        name, calories, protein, carbs, fat = (
            part.strip() for part in parts[:REQUIRED_FIELDS]
        )
        items.append(
            FoodItem(
                id=id_factory(),
                name=name,
                calories=calories,
                protein=protein,
                carbs=carbs,
                fat=fat,
                meal_category=meal_category,
                date_stamp=date_stamp,
            )
        )
    return items
