"""
Ports (Interfaces) for the meal lookup pipeline.

Defines the external collaborators used by the orchestrator and the
fetch client: relay transports, the fetch client itself and the render
target.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Protocol, runtime_checkable

import aiohttp

from school_meal.domain.shared.value_objects import DateToken


@runtime_checkable
class IRelayTransport(Protocol):
    """
    Port for an HTTP relay that forwards a request to the NEIS API.

    Relays are interchangeable; they differ only in request shape.
    """

    name: str

    async def get_text(self, session: aiohttp.ClientSession, target_url: str) -> str:
        """
        Fetch ``target_url`` through the relay.

        Args:
            session: Open aiohttp session
            target_url: Fully built NEIS URL

        Returns:
            Upstream response body, verbatim

        Raises:
            ExternalServiceError: If the relay answers with a non-success status
            aiohttp.ClientError: On network failure
        """
        ...


@runtime_checkable
class IMealFetchClient(Protocol):
    """Port for retrieving raw meal XML for a date."""

    async def fetch(self, token: DateToken) -> str:
        """
        Retrieve the raw XML for ``token``.

        Raises:
            NetworkError: If every transport failed
        """
        ...


@runtime_checkable
class IRenderTarget(Protocol):
    """
    Port for the page being rendered.

    Five independent regions plus a user-facing alert. Only the
    presenter writes regions; the orchestrator may raise alerts.
    """

    def set_text(self, region: str, text: str) -> None:
        """Set plain text of a region."""
        ...

    def set_html(self, region: str, markup: str) -> None:
        """Set markup of a region."""
        ...

    def set_visible(self, region: str, visible: bool) -> None:
        """Show or hide a region."""
        ...

    def alert(self, message: str) -> None:
        """Show a blocking user-facing message."""
        ...
