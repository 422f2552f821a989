"""Tests for meal domain models."""

import pytest
from pydantic import ValidationError

from school_meal.domain.meal.models import MealRecord, NutrientEntry, Nutrition


class TestNutrition:
    """Test Nutrition mapping behavior."""

    def test_mapping_access(self, sample_nutrition: Nutrition) -> None:
        assert "탄수화물" in sample_nutrition
        assert "철분" not in sample_nutrition
        assert sample_nutrition["단백질"].value == "35.1"
        assert sample_nutrition.get("철분") is None

    def test_to_dict_omits_missing_calories(self) -> None:
        nutrition = Nutrition(nutrients={"지방": NutrientEntry(value="5", unit="g")})

        assert nutrition.to_dict() == {"지방": {"value": "5", "unit": "g"}}


class TestMealRecord:
    """Test MealRecord construction."""

    def test_is_frozen(self, sample_lunch: MealRecord) -> None:
        with pytest.raises(ValidationError):
            sample_lunch.meal_type = "석식"  # type: ignore[misc]

    def test_requires_meal_type(self) -> None:
        with pytest.raises(ValidationError):
            MealRecord(meal_type="", dishes=("밥",))

    def test_structural_equality(self, sample_lunch: MealRecord) -> None:
        copy = MealRecord(**sample_lunch.model_dump())

        assert copy == sample_lunch
