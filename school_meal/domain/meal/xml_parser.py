"""
NEIS meal XML parser.

Transforms ``mealServiceDietInfo`` XML responses to MealRecord lists.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional

import structlog

from school_meal.domain.meal import nutrition_parser
from school_meal.domain.meal.models import MealRecord
from school_meal.domain.shared.errors import (
    ApiError,
    MalformedResponseError,
    NoDataError,
)

logger = structlog.get_logger(__name__)

SUCCESS_CODE = "INFO-000"
FALLBACK_MESSAGE = "데이터 없음"

CONTAINER_TAG = "mealServiceDietInfo"
RESULT_TAG = "RESULT"
ROW_TAG = "row"
LINE_BREAK_TAG = "br"

MEAL_TYPE_FIELD = "MMEAL_SC_NM"
DISH_FIELD = "DDISH_NM"
DATE_FIELD = "MLSV_YMD"
NUTRITION_FIELD = "NTR_INFO"
CALORIE_FIELD = "CAL_INFO"


def _inner_text(element: ET.Element) -> str:
    # Nested markup is flattened; <br/> elements are kept as literal
    # markers so the line splitter still sees them.
    parts = [element.text or ""]
    for child in element:
        if child.tag.lower() == LINE_BREAK_TAG:
            parts.append("<br/>")
        else:
            parts.append(_inner_text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def element_text(parent: ET.Element, tag: str) -> str:
    """
    Trimmed text of the first descendant named ``tag``.

    Plain text and CDATA content read the same. A missing element
    yields an empty string.

    Example:
        >>> row = ET.fromstring("<row><A><![CDATA[ x<br/>y ]]></A></row>")
        >>> element_text(row, "A")
        'x<br/>y'
        >>> element_text(row, "B")
        ''
    """
    element = parent.find(f".//{tag}")
    if element is None:
        return ""
    return _inner_text(element).strip()


def _find(root: ET.Element, tag: str) -> Optional[ET.Element]:
    # root.iter includes the root element itself
    return next(root.iter(tag), None)


class MealXmlParser:
    """Maps NEIS meal service XML to domain models."""

    @staticmethod
    def parse(raw_xml: str) -> list[MealRecord]:
        """Parse a meal service response.

        Args:
            raw_xml: Response body as returned by the relay

        Returns:
            Meal records in document order, possibly empty

        Raises:
            MalformedResponseError: If the body is not well-formed XML
            ApiError: If RESULT/CODE is present and not INFO-000
            NoDataError: If there are no rows and no meal container

        Example:
            >>> xml = (
            ...     "<mealServiceDietInfo><row>"
            ...     "<MMEAL_SC_NM>중식</MMEAL_SC_NM>"
            ...     "<DDISH_NM>밥<br/>국</DDISH_NM>"
            ...     "</row></mealServiceDietInfo>"
            ... )
            >>> [r.dishes for r in MealXmlParser.parse(xml)]
            [('밥', '국')]
        """
        try:
            root = ET.fromstring(raw_xml)
        except ET.ParseError as e:
            logger.error("XML parse error", error=str(e))
            raise MalformedResponseError(f"Response is not valid XML: {e}") from e

        MealXmlParser._check_result(root)

        rows = list(root.iter(ROW_TAG))
        logger.debug("Meal rows found", count=len(rows))

        meals = []
        for index, row in enumerate(rows):
            record = MealXmlParser._parse_row(row)
            if record is None:
                logger.info("Dropping incomplete meal row", index=index)
                continue
            meals.append(record)

        if not rows and _find(root, CONTAINER_TAG) is None:
            raise NoDataError("No meal data for this date")

        return meals

    @staticmethod
    def _check_result(root: ET.Element) -> None:
        result = _find(root, RESULT_TAG)
        if result is None:
            return

        code = element_text(result, "CODE")
        message = element_text(result, "MESSAGE")
        logger.info("NEIS result", code=code, message=message)

        if code and code != SUCCESS_CODE:
            raise ApiError(code, message or FALLBACK_MESSAGE)

    @staticmethod
    def _parse_row(row: ET.Element) -> Optional[MealRecord]:
        meal_type = element_text(row, MEAL_TYPE_FIELD)
        dish_blob = element_text(row, DISH_FIELD)
        if not meal_type or not dish_blob:
            return None

        dishes = tuple(
            dish.strip()
            for dish in nutrition_parser.split_lines(dish_blob)
            if dish.strip()
        )

        return MealRecord(
            meal_type=meal_type,
            dishes=dishes,
            date=element_text(row, DATE_FIELD),
            nutrition=nutrition_parser.parse(
                element_text(row, NUTRITION_FIELD),
                element_text(row, CALORIE_FIELD),
            ),
        )
