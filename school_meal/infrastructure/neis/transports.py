"""
Relay transports.

Both relays embed the URL-encoded NEIS request URL in their own URL and
return the upstream body unchanged.
"""

from typing import Optional
from urllib.parse import quote

import aiohttp
import structlog

from school_meal.domain.shared.errors import ExternalServiceError

logger = structlog.get_logger(__name__)


class PrefixRelayTransport:
    """Relay addressed as ``<prefix><url-encoded target>``."""

    name = "relay"

    def __init__(
        self,
        prefix: str,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize transport.

        Args:
            prefix: Relay URL up to and including the parameter separator
            timeout_seconds: Total request timeout, None for no timeout
        """
        self.prefix = prefix
        self.timeout_seconds = timeout_seconds

    def build_url(self, target_url: str) -> str:
        """Embed ``target_url`` in the relay URL."""
        return f"{self.prefix}{quote(target_url, safe='')}"

    async def get_text(self, session: aiohttp.ClientSession, target_url: str) -> str:
        """Fetch ``target_url`` through the relay.

        Args:
            session: Open aiohttp session
            target_url: Fully built NEIS URL

        Returns:
            Response body as text

        Raises:
            ExternalServiceError: If the relay answers with status >= 400
            aiohttp.ClientError: On network failure
        """
        url = self.build_url(target_url)
        logger.debug("Relay request", transport=self.name, url=url)

        async with session.get(
            url,
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
        ) as response:
            if response.status >= 400:
                msg = f"{self.name} returned status {response.status}"
                raise ExternalServiceError(msg, status=response.status)

            body: str = await response.text()
            logger.debug(
                "Relay response",
                transport=self.name,
                status=response.status,
                length=len(body),
                preview=body[:100],
            )
            return body


class CorsProxyTransport(PrefixRelayTransport):
    """General-purpose forwarding relay (corsproxy.io)."""

    name = "corsproxy"
    DEFAULT_PREFIX = "https://corsproxy.io/?"

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        super().__init__(prefix, timeout_seconds)


class AllOriginsTransport(PrefixRelayTransport):
    """Alternate relay taking the target as a ``url`` parameter (allorigins)."""

    name = "allorigins"
    DEFAULT_PREFIX = "https://api.allorigins.win/raw?url="

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        super().__init__(prefix, timeout_seconds)
