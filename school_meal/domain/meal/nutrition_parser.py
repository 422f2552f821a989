"""
Nutrition parser.

Extracts calories and per-nutrient values from the ``NTR_INFO`` and
``CAL_INFO`` text fields. Best effort: fragments that do not match are
dropped, nothing is raised.
"""

from __future__ import annotations

import re
from typing import Optional

import structlog

from school_meal.domain.meal.models import NutrientEntry, Nutrition

logger = structlog.get_logger(__name__)

# Line-break marker embedded in NEIS text fields
LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)

# name(unit) : value
NUTRIENT_ENTRY = re.compile(r"(.+?)\((.+?)\)\s*:\s*(.+)")

CALORIE_UNIT = re.compile(r"\s*Kcal\s*$")


def split_lines(text: str) -> list[str]:
    """Split a NEIS text blob on its <br/> marker."""
    return LINE_BREAK.split(text)


def parse_calories(calorie_text: str) -> str:
    """
    Strip the trailing "Kcal" marker.

    Example:
        >>> parse_calories("512.3 Kcal")
        '512.3'
    """
    return CALORIE_UNIT.sub("", calorie_text.strip()).strip()


def parse_nutrients(nutrition_text: str) -> dict[str, NutrientEntry]:
    """
    Parse ``name(unit) : value`` entries separated by <br/>.

    Later entries with the same name replace earlier ones.

    Example:
        >>> parse_nutrients("단백질(g) : 12.3<br/>지방(g) : 5")["지방"].value
        '5'
    """
    nutrients: dict[str, NutrientEntry] = {}

    for fragment in split_lines(nutrition_text):
        match = NUTRIENT_ENTRY.search(fragment)
        if not match:
            if fragment.strip():
                logger.debug("Skipping nutrient fragment", fragment=fragment)
            continue

        name, unit, value = match.groups()
        nutrients[name.strip()] = NutrientEntry(value=value.strip(), unit=unit.strip())

    return nutrients


def parse(
    nutrition_text: Optional[str],
    calorie_text: Optional[str],
) -> Optional[Nutrition]:
    """
    Build a Nutrition block from the two raw fields.

    Args:
        nutrition_text: ``NTR_INFO`` blob, may be None or empty
        calorie_text: ``CAL_INFO`` blob, may be None or empty

    Returns:
        None when both fields are absent, otherwise a Nutrition that
        may hold any subset of nutrients

    Example:
        >>> result = parse("단백질(g) : 12.3<br/>지방(g) : 5", "500Kcal")
        >>> result.to_dict()["calories"]
        '500'
        >>> assert parse(None, "") is None
    """
    if not nutrition_text and not calorie_text:
        return None

    calories = parse_calories(calorie_text) if calorie_text else None
    nutrients = parse_nutrients(nutrition_text) if nutrition_text else {}

    return Nutrition(calories=calories, nutrients=nutrients)
