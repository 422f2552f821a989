"""
Shared fixtures for meal viewer tests.

XML samples follow the shape of real mealServiceDietInfo responses.
"""

from datetime import date
from typing import Any
from unittest.mock import AsyncMock

import pytest

from school_meal.application.meal.orchestration_service import (
    MealLookupOrchestrator,
)
from school_meal.application.meal.presenter import MealPresenter
from school_meal.domain.meal.models import MealRecord, NutrientEntry, Nutrition
from school_meal.domain.meal.ports import IMealFetchClient
from school_meal.infrastructure.render.page_target import PageRenderTarget


# ═══════════════════════════════════════════════════════════
# XML FIXTURES
# ═══════════════════════════════════════════════════════════


LUNCH_XML = """<?xml version="1.0" encoding="UTF-8"?>
<mealServiceDietInfo>
<head>
<list_total_count>1</list_total_count>
<RESULT>
<CODE>INFO-000</CODE>
<MESSAGE>정상 처리되었습니다.</MESSAGE>
</RESULT>
</head>
<row>
<ATPT_OFCDC_SC_CODE>J10</ATPT_OFCDC_SC_CODE>
<SD_SCHUL_CODE>7530079</SD_SCHUL_CODE>
<MMEAL_SC_CODE>2</MMEAL_SC_CODE>
<MMEAL_SC_NM>중식</MMEAL_SC_NM>
<MLSV_YMD>20240315</MLSV_YMD>
<DDISH_NM><![CDATA[현미밥 <br/>쇠고기미역국 (5.6.16)<br/>제육볶음*(5.6.10.13)<br/>배추김치 (9)]]></DDISH_NM>
<CAL_INFO><![CDATA[812.5 Kcal]]></CAL_INFO>
<NTR_INFO><![CDATA[탄수화물(g) : 110.2<br/>단백질(g) : 35.1<br/>지방(g) : 22.4<br/>비타민A(R.E) : 120.5<br/>칼슘(mg) : 250.3<br/>나트륨(mg) : 1500.2]]></NTR_INFO>
</row>
</mealServiceDietInfo>
"""

NO_DATA_XML = """<?xml version="1.0" encoding="UTF-8"?>
<RESULT>
<CODE>INFO-200</CODE>
<MESSAGE>해당하는 데이터가 없습니다.</MESSAGE>
</RESULT>
"""


@pytest.fixture
def lunch_xml() -> str:
    """Successful response with one lunch row."""
    return LUNCH_XML


@pytest.fixture
def no_data_xml() -> str:
    """Response for a date without meals."""
    return NO_DATA_XML


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def sample_nutrition() -> Nutrition:
    """Nutrition block with calories and two nutrients."""
    return Nutrition(
        calories="812.5",
        nutrients={
            "탄수화물": NutrientEntry(value="110.2", unit="g"),
            "단백질": NutrientEntry(value="35.1", unit="g"),
        },
    )


@pytest.fixture
def sample_lunch(sample_nutrition: Nutrition) -> MealRecord:
    """Lunch record with allergen-annotated dishes."""
    return MealRecord(
        meal_type="중식",
        dishes=("현미밥", "쇠고기미역국 (5.6.16)", "제육볶음*(5.6.10.13)"),
        date="20240315",
        nutrition=sample_nutrition,
    )


# ═══════════════════════════════════════════════════════════
# PIPELINE FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def page_target() -> PageRenderTarget:
    """Fresh in-memory render target."""
    return PageRenderTarget()


@pytest.fixture
def presenter(page_target: PageRenderTarget) -> MealPresenter:
    """Presenter writing to page_target."""
    return MealPresenter(page_target)


@pytest.fixture
def mock_fetch_client(lunch_xml: str) -> Any:
    """Mock fetch client.

    Default behavior: returns lunch_xml.
    """
    client = AsyncMock(spec=IMealFetchClient)
    client.fetch.return_value = lunch_xml
    return client


@pytest.fixture
def orchestrator(
    mock_fetch_client: Any,
    presenter: MealPresenter,
) -> MealLookupOrchestrator:
    """Orchestrator with a mocked client and a fixed 'today'."""
    return MealLookupOrchestrator(
        fetch_client=mock_fetch_client,
        presenter=presenter,
        today=lambda: date(2024, 3, 15),
    )
