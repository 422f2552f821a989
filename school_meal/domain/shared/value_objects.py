"""
Shared value objects.

Immutable, validated domain primitives.
Following DDD value object pattern.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DateToken(BaseModel):
    """
    Compact date token sent as the ``MLSV_YMD`` query parameter.

    Exactly eight digits (YYYYMMDD) naming a real calendar date.

    Example:
        >>> token = DateToken(value="20240315")
        >>> assert str(token) == "20240315"
        >>> assert token.to_iso() == "2024-03-15"
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., pattern=r"^[0-9]{8}$", description="YYYYMMDD digits")

    @field_validator("value")
    @classmethod
    def real_calendar_date(cls, v: str) -> str:
        """Reject digit strings that are not a calendar date."""
        date(int(v[:4]), int(v[4:6]), int(v[6:]))
        return v

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Debug representation."""
        return f"DateToken('{self.value}')"

    def __hash__(self) -> int:
        """Allow use as dict key."""
        return hash(self.value)

    def to_iso(self) -> str:
        """Insert hyphens back: YYYYMMDD -> YYYY-MM-DD."""
        return f"{self.value[:4]}-{self.value[4:6]}-{self.value[6:]}"
