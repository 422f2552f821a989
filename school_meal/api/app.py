"""FastAPI page surface for the meal viewer."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse

from school_meal import __version__
from school_meal.application.meal.orchestration_service import (
    MealLookupOrchestrator,
)
from school_meal.application.meal.presenter import MealPresenter
from school_meal.config import NeisSettings, get_log_level, get_settings
from school_meal.domain.meal.ports import IMealFetchClient
from school_meal.infrastructure.neis.api_client import NeisMealClient
from school_meal.infrastructure.render.page_target import PageRenderTarget
from school_meal.log_config import configure_logging

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[NeisSettings] = None,
    fetch_client: Optional[IMealFetchClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings (read from the environment if omitted)
        fetch_client: Pre-built client; when omitted a NeisMealClient is
            opened for the lifetime of the app

    Returns:
        FastAPI app serving the meal page
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if fetch_client is not None:
            app.state.fetch_client = fetch_client
            yield
            return

        async with NeisMealClient(settings) as client:
            app.state.fetch_client = client
            logger.info(
                "Meal client ready",
                office_code=settings.office_code,
                school_code=settings.school_code,
            )
            yield

    app = FastAPI(title="School Meal", version=__version__, lifespan=lifespan)

    @app.get("/", response_class=HTMLResponse)
    async def meal_page(
        request: Request,
        date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    ) -> HTMLResponse:
        """Meal page; without ``date`` it shows today's meals."""
        target = PageRenderTarget(selected_date=date or "")
        orchestrator = MealLookupOrchestrator(
            fetch_client=request.app.state.fetch_client,
            presenter=MealPresenter(target),
            timezone=settings.timezone,
        )

        if date is None:
            today = orchestrator.today_iso()
            target.selected_date = today
            await orchestrator.on_page_ready(today)
        else:
            await orchestrator.on_search_action(date)

        return HTMLResponse(target.to_html())

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def build_default_app() -> FastAPI:
    """Entry point for ``uvicorn school_meal.api.app:build_default_app --factory``."""
    load_dotenv()
    configure_logging(get_log_level())
    return create_app()
