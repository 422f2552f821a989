"""
Meal domain models.

Immutable records produced by the XML parser and consumed by the presenter.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class NutrientEntry(BaseModel):
    """
    One nutrient quantity as published upstream.

    Both fields are free text; values are not validated as numbers
    because the source occasionally carries malformed data.

    Example:
        >>> entry = NutrientEntry(value="12.3", unit="g")
        >>> assert entry.value == "12.3"
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Quantity as text")
    unit: str = Field(..., description="Unit as text (g, mg, R.E, ...)")


class Nutrition(BaseModel):
    """
    Nutrition block of a meal.

    Mapping from nutrient name (e.g. "탄수화물") to NutrientEntry, plus
    the calorie figure extracted separately with its unit removed.
    Any nutrient may be missing.

    Example:
        >>> nutrition = Nutrition(
        ...     calories="500",
        ...     nutrients={"지방": NutrientEntry(value="5", unit="g")},
        ... )
        >>> assert "지방" in nutrition
        >>> assert nutrition["지방"].unit == "g"
    """

    model_config = ConfigDict(frozen=True)

    calories: Optional[str] = Field(None, description="Calories without 'Kcal'")
    nutrients: dict[str, NutrientEntry] = Field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.nutrients

    def __getitem__(self, name: str) -> NutrientEntry:
        return self.nutrients[name]

    def get(self, name: str) -> Optional[NutrientEntry]:
        """Nutrient entry by name, or None."""
        return self.nutrients.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to ``{"calories": ..., name: {"value", "unit"}}``."""
        data: dict[str, Any] = {}
        if self.calories is not None:
            data["calories"] = self.calories
        for name, entry in self.nutrients.items():
            data[name] = entry.model_dump()
        return data


class MealRecord(BaseModel):
    """
    One meal service entry (breakfast, lunch, dinner) for a date.

    Attributes:
        meal_type: Upstream meal type name (e.g. "중식")
        dishes: Dish strings in source order, allergen marks included
        date: Meal date as sent upstream (YYYYMMDD)
        nutrition: Parsed nutrition, None if the row carried none

    Example:
        >>> record = MealRecord(
        ...     meal_type="중식",
        ...     dishes=("밥", "김치(9)"),
        ...     date="20240315",
        ... )
        >>> assert record.nutrition is None
    """

    model_config = ConfigDict(frozen=True)

    meal_type: str = Field(..., min_length=1, description="Meal type name")
    dishes: tuple[str, ...] = Field(default=(), description="Dish strings")
    date: str = Field("", description="Meal date (YYYYMMDD)")
    nutrition: Optional[Nutrition] = Field(None, description="Nutrition block")


class RenderState(str, Enum):
    """Mutually exclusive visibility state of the render target."""

    LOADING = "LOADING"
    CONTENT = "CONTENT"
    ERROR = "ERROR"


class Region(str, Enum):
    """Render target regions, named after their page element ids."""

    DATE_HEADER = "meal-date"
    LUNCH = "lunch"
    NUTRITION = "nutrition"
    LOADING = "loading"
    CONTENT = "meal-info"
    ERROR = "error-message"


class RenderView(BaseModel):
    """
    Complete state of the five render regions.

    Built by the presenter from a RenderState and its payload, then
    written to the target as a whole. Two renders of the same input
    produce equal views.
    """

    model_config = ConfigDict(frozen=True)

    state: Optional[RenderState] = None
    date_header: str = ""
    lunch_html: str = ""
    nutrition_html: str = ""
    loading_visible: bool = False
    content_visible: bool = False
    error_visible: bool = False
