"""Configuration utilities.

Settings come from environment variables. Entry points load a ``.env``
file first with python-dotenv.
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_BASE_URL = "https://open.neis.go.kr/hub/mealServiceDietInfo"
DEFAULT_OFFICE_CODE = "J10"  # 경기도교육청
DEFAULT_SCHOOL_CODE = "7530079"
DEFAULT_PRIMARY_RELAY = "https://corsproxy.io/?"
DEFAULT_FALLBACK_RELAY = "https://api.allorigins.win/raw?url="
DEFAULT_TIMEZONE = "Asia/Seoul"


class NeisSettings(BaseModel):
    """
    Settings for the NEIS meal lookup.

    Example:
        >>> settings = NeisSettings(school_code="7010536")
        >>> assert settings.office_code == "J10"
    """

    model_config = ConfigDict(frozen=True)

    api_base_url: str = Field(DEFAULT_API_BASE_URL, description="mealServiceDietInfo URL")
    office_code: str = Field(DEFAULT_OFFICE_CODE, min_length=1, description="ATPT_OFCDC_SC_CODE")
    school_code: str = Field(DEFAULT_SCHOOL_CODE, min_length=1, description="SD_SCHUL_CODE")
    api_key: Optional[str] = Field(None, description="Optional NEIS KEY parameter")
    primary_relay_url: str = Field(DEFAULT_PRIMARY_RELAY)
    fallback_relay_url: str = Field(DEFAULT_FALLBACK_RELAY)
    timeout_seconds: Optional[float] = Field(None, gt=0, description="None means no timeout")
    timezone: str = Field(DEFAULT_TIMEZONE, description="Zone used for 'today'")


def get_timeout_seconds() -> Optional[float]:
    """
    Get HTTP timeout.

    Returns:
        MEAL_HTTP_TIMEOUT_S as float, or None if unset or empty
    """
    raw = os.getenv("MEAL_HTTP_TIMEOUT_S", "").strip()
    if not raw:
        return None
    return float(raw)


def get_log_level() -> str:
    """Get log level name from LOG_LEVEL, defaults to INFO."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_settings() -> NeisSettings:
    """Build NeisSettings from the environment."""
    return NeisSettings(
        api_base_url=os.getenv("NEIS_API_BASE_URL", DEFAULT_API_BASE_URL),
        office_code=os.getenv("NEIS_OFFICE_CODE", DEFAULT_OFFICE_CODE),
        school_code=os.getenv("NEIS_SCHOOL_CODE", DEFAULT_SCHOOL_CODE),
        api_key=os.getenv("NEIS_API_KEY") or None,
        primary_relay_url=os.getenv("MEAL_PRIMARY_RELAY_URL", DEFAULT_PRIMARY_RELAY),
        fallback_relay_url=os.getenv("MEAL_FALLBACK_RELAY_URL", DEFAULT_FALLBACK_RELAY),
        timeout_seconds=get_timeout_seconds(),
        timezone=os.getenv("MEAL_TIMEZONE", DEFAULT_TIMEZONE),
    )
