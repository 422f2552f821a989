"""
Meal Lookup Orchestration Service.

Runs one lookup pipeline per trigger: validate date -> token -> Loading
-> fetch -> parse -> Content. Any fetch or parse failure ends in Error.

Design Pattern: Service Layer + Dependency Injection
"""

from datetime import date, datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

import structlog

from school_meal.application.meal.presenter import MealPresenter
from school_meal.domain.meal.date_codec import to_token
from school_meal.domain.meal.models import MealRecord, RenderState
from school_meal.domain.meal.ports import IMealFetchClient
from school_meal.domain.meal.xml_parser import MealXmlParser
from school_meal.domain.shared.errors import InvalidDateError

logger = structlog.get_logger(__name__)

SELECT_DATE_ALERT = "날짜를 선택해주세요."
ENTER_KEY = "Enter"


class MealLookupOrchestrator:
    """
    Orchestrates meal lookups triggered by the page or the user.

    Responsibilities:
    - Validate the selected date and convert it to a token
    - Drive the presenter through Loading then Content or Error
    - Act as the single recovery boundary for pipeline errors
    - Discard completions superseded by a newer lookup

    Each invocation gets a sequence number. When a slower, older lookup
    completes after a newer one started, its result is dropped instead
    of overwriting the page. The older fetch itself is not cancelled.

    Dependencies (injected):
    - fetch_client: IMealFetchClient - Raw XML retrieval
    - presenter: MealPresenter - Sole writer of the render target

    Example:
        >>> orchestrator = MealLookupOrchestrator(
        ...     fetch_client=client,
        ...     presenter=MealPresenter(target),
        ... )
        >>> state = await orchestrator.on_search_action("2024-03-15")
        >>> assert state == RenderState.CONTENT
    """

    def __init__(
        self,
        fetch_client: IMealFetchClient,
        presenter: MealPresenter,
        parse: Callable[[str], list[MealRecord]] = MealXmlParser.parse,
        timezone: str = "Asia/Seoul",
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        """
        Initialize orchestrator with dependencies.

        Args:
            fetch_client: Client returning raw XML for a token
            presenter: Presenter bound to the render target
            parse: XML to meal records function
            timezone: Zone used to resolve "today" on page load
            today: Override for the current date (tests)
        """
        self.fetch_client = fetch_client
        self.presenter = presenter
        self.parse = parse
        self.timezone = timezone
        self._today = today
        self._latest_sequence = 0

    def today_iso(self) -> str:
        """Current date in the configured zone, as YYYY-MM-DD."""
        if self._today is not None:
            return self._today().isoformat()
        return datetime.now(ZoneInfo(self.timezone)).date().isoformat()

    def _is_stale(self, sequence: int) -> bool:
        return sequence != self._latest_sequence

    async def search(self, selected_date: Optional[str]) -> Optional[RenderState]:
        """
        Run the lookup pipeline for ``selected_date``.

        Args:
            selected_date: YYYY-MM-DD from the date selector

        Returns:
            Final render state, or None if the lookup was aborted
            (no valid date) or superseded by a newer lookup
        """
        if not selected_date:
            self.presenter.target.alert(SELECT_DATE_ALERT)
            return None

        try:
            token = to_token(selected_date)
        except InvalidDateError as e:
            logger.warning("Invalid date selected", date=selected_date, error=str(e))
            self.presenter.target.alert(SELECT_DATE_ALERT)
            return None

        self._latest_sequence += 1
        sequence = self._latest_sequence
        log = logger.bind(sequence=sequence, date=token.value)

        self.presenter.render(RenderState.LOADING)

        try:
            raw_xml = await self.fetch_client.fetch(token)
            meals = self.parse(raw_xml)

            if self._is_stale(sequence):
                log.info("Discarding superseded lookup result", meals=len(meals))
                return None

            view = self.presenter.render(RenderState.CONTENT, meals, selected_date)
        except Exception as e:
            log.error("Meal lookup failed", error_type=type(e).__name__, error=str(e))
            if self._is_stale(sequence):
                log.info("Discarding superseded lookup failure")
                return None
            self.presenter.render(RenderState.ERROR)
            return RenderState.ERROR

        log.info("Meal lookup finished", state=view.state, meals=len(meals))
        return view.state

    async def on_page_ready(self, today: Optional[str] = None) -> Optional[RenderState]:
        """Page load trigger: look up today's meals.

        ``today`` lets a caller that already resolved the date reuse it.
        """
        return await self.search(today or self.today_iso())

    async def on_search_action(self, selected_date: Optional[str]) -> Optional[RenderState]:
        """Search button trigger."""
        return await self.search(selected_date)

    async def on_key_press(
        self, key: str, selected_date: Optional[str]
    ) -> Optional[RenderState]:
        """Key press in the date selector; only Enter triggers a lookup."""
        if key != ENTER_KEY:
            return None
        return await self.search(selected_date)
