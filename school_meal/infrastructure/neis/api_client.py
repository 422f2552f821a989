"""
NEIS meal service client.

Fetches the raw meal XML for a date through a primary relay, falling
back once to an alternate relay.
"""

from typing import Optional
from urllib.parse import urlencode

import aiohttp
import structlog

from school_meal.config import NeisSettings
from school_meal.domain.meal.ports import IRelayTransport
from school_meal.domain.shared.errors import NetworkError
from school_meal.domain.shared.value_objects import DateToken
from school_meal.infrastructure.neis.transports import (
    AllOriginsTransport,
    CorsProxyTransport,
)

logger = structlog.get_logger(__name__)


class NeisMealClient:
    """
    NEIS ``mealServiceDietInfo`` client.

    One fetch is one logical attempt: the primary relay is tried once,
    and on any failure the fallback relay is tried once. No retries,
    no backoff, no caching.

    Example:
        >>> async with NeisMealClient() as client:
        ...     xml = await client.fetch(DateToken(value="20240315"))
    """

    def __init__(
        self,
        settings: Optional[NeisSettings] = None,
        primary: Optional[IRelayTransport] = None,
        fallback: Optional[IRelayTransport] = None,
    ) -> None:
        """Initialize client.

        Args:
            settings: School and relay settings (defaults if omitted)
            primary: Transport tried first
            fallback: Transport tried after the primary fails
        """
        self.settings = settings or NeisSettings()
        self.primary = primary or CorsProxyTransport(
            self.settings.primary_relay_url, self.settings.timeout_seconds
        )
        self.fallback = fallback or AllOriginsTransport(
            self.settings.fallback_relay_url, self.settings.timeout_seconds
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "NeisMealClient":
        """Async context manager entry."""
        self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.close()
            self._session = None

    def build_target_url(self, token: DateToken) -> str:
        """Build the upstream request URL for ``token``.

        Example:
            >>> NeisMealClient().build_target_url(DateToken(value="20240315"))
            'https://open.neis.go.kr/hub/mealServiceDietInfo?ATPT_OFCDC_SC_CODE=J10&SD_SCHUL_CODE=7530079&MLSV_YMD=20240315&Type=xml'
        """
        params = {
            "ATPT_OFCDC_SC_CODE": self.settings.office_code,
            "SD_SCHUL_CODE": self.settings.school_code,
            "MLSV_YMD": token.value,
            "Type": "xml",
        }
        if self.settings.api_key:
            params["KEY"] = self.settings.api_key
        return f"{self.settings.api_base_url}?{urlencode(params)}"

    async def fetch(self, token: DateToken) -> str:
        """Fetch raw meal XML for a date.

        Args:
            token: Date to look up

        Returns:
            Response body as text

        Raises:
            NetworkError: If both relays failed
        """
        if not self._session:
            raise NetworkError("Client not initialized, use async with")

        target_url = self.build_target_url(token)

        try:
            body = await self.primary.get_text(self._session, target_url)
            logger.info("Meal XML received", transport=self.primary.name, date=token.value)
            return body
        except Exception as e:
            logger.warning(
                "Primary relay failed, trying fallback",
                transport=self.primary.name,
                date=token.value,
                error=str(e) or type(e).__name__,
            )

        try:
            body = await self.fallback.get_text(self._session, target_url)
        except Exception as e:
            logger.error(
                "Fallback relay failed",
                transport=self.fallback.name,
                date=token.value,
                error=str(e) or type(e).__name__,
            )
            msg = f"All relays failed, last error from {self.fallback.name}: {e}"
            raise NetworkError(msg) from e

        logger.info("Meal XML received", transport=self.fallback.name, date=token.value)
        return body
