"""
Date codec.

Converts the user-facing ISO date into the API's compact token and into a
long Korean display string.
"""

from __future__ import annotations

import re
from datetime import date

from pydantic import ValidationError

from school_meal.domain.shared.errors import InvalidDateError
from school_meal.domain.shared.value_objects import DateToken

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

WEEKDAYS_KO = ("월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일")


def to_token(iso_date: str) -> DateToken:
    """
    Strip separators from a YYYY-MM-DD date.

    Args:
        iso_date: Date selected by the user

    Returns:
        DateToken for the upstream query

    Raises:
        InvalidDateError: If empty, wrongly shaped or not a calendar date

    Example:
        >>> to_token("2024-03-15").value
        '20240315'
    """
    if not iso_date or not _ISO_DATE.fullmatch(iso_date):
        raise InvalidDateError(f"Expected YYYY-MM-DD, got {iso_date!r}")

    try:
        return DateToken(value=iso_date.replace("-", ""))
    except ValidationError as e:
        raise InvalidDateError(f"Not a calendar date: {iso_date!r}") from e


def to_display(iso_date: str) -> str:
    """
    Format a date as a long Korean date with weekday.

    Example:
        >>> to_display("2024-03-15")
        '2024년 3월 15일 금요일'
    """
    try:
        day = date.fromisoformat(iso_date)
    except (TypeError, ValueError) as e:
        raise InvalidDateError(f"Unparseable date: {iso_date!r}") from e

    return f"{day.year}년 {day.month}월 {day.day}일 {WEEKDAYS_KO[day.weekday()]}"
