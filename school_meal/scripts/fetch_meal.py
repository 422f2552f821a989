#!/usr/bin/env python3
"""
Print the school meal for a date.

Runs the same lookup pipeline as the web page against a text target.

Usage:
    python -m school_meal.scripts.fetch_meal
    python -m school_meal.scripts.fetch_meal --date 2024-03-15
"""

import argparse
import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv

from school_meal.application.meal.orchestration_service import (
    MealLookupOrchestrator,
)
from school_meal.application.meal.presenter import MealPresenter
from school_meal.config import get_log_level, get_settings
from school_meal.domain.meal.models import RenderState
from school_meal.infrastructure.neis.api_client import NeisMealClient
from school_meal.infrastructure.render.page_target import PageRenderTarget
from school_meal.log_config import configure_logging


async def main(selected_date: Optional[str]) -> int:
    """Run one lookup and print the result.

    Returns:
        0 when meals were shown, 1 otherwise
    """
    settings = get_settings()
    target = PageRenderTarget(selected_date=selected_date or "")

    async with NeisMealClient(settings) as client:
        orchestrator = MealLookupOrchestrator(
            fetch_client=client,
            presenter=MealPresenter(target),
            timezone=settings.timezone,
        )
        if selected_date is None:
            state = await orchestrator.on_page_ready()
        else:
            state = await orchestrator.on_search_action(selected_date)

    print(target.to_text())
    return 0 if state == RenderState.CONTENT else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Show the school meal for a date")
    parser.add_argument("--date", help="YYYY-MM-DD (default: today)")
    args = parser.parse_args()

    load_dotenv()
    configure_logging(get_log_level())

    exit_code = asyncio.run(main(args.date))
    sys.exit(exit_code)
