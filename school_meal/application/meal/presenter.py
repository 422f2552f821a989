"""
Meal presenter.

Maps a RenderState and its payload to a RenderView, and writes that view
to the render target. It is the only writer of region state.
"""

from __future__ import annotations

import html
import re
from typing import Optional, Sequence

import structlog

from school_meal.domain.meal.date_codec import to_display
from school_meal.domain.meal.models import (
    MealRecord,
    Nutrition,
    Region,
    RenderState,
    RenderView,
)
from school_meal.domain.meal.ports import IRenderTarget

logger = structlog.get_logger(__name__)

PLACEHOLDER_HTML = "<p>정보 없음</p>"
LUNCH_TYPE = "중식"

# Display order; nutrients outside this list are never shown
NUTRIENT_LABELS = (
    "탄수화물",
    "단백질",
    "지방",
    "비타민A",
    "티아민",
    "리보플라빈",
    "비타민C",
    "칼슘",
    "철분",
)

_ALLERGEN_CODES = re.compile(r"\([^)]*\)")


def clean_dish(dish: str) -> str:
    """
    Remove allergen annotations and asterisks for display.

    Example:
        >>> clean_dish("김치(9.13)*")
        '김치'
    """
    return _ALLERGEN_CODES.sub("", dish).replace("*", "").strip()


def dishes_html(meal: MealRecord) -> str:
    items = "".join(f"<li>{html.escape(clean_dish(dish))}</li>" for dish in meal.dishes)
    return f"<ul>{items}</ul>" if items else PLACEHOLDER_HTML


def nutrition_html(nutrition: Optional[Nutrition]) -> str:
    """Key-value lines for calories and allow-listed nutrients."""
    if nutrition is None:
        return PLACEHOLDER_HTML

    lines = []
    if nutrition.calories:
        lines.append(_nutrition_line("칼로리", f"{nutrition.calories} Kcal"))

    for label in NUTRIENT_LABELS:
        entry = nutrition.get(label)
        if entry is not None:
            lines.append(_nutrition_line(label, f"{entry.value} {entry.unit}"))

    return "".join(lines) or PLACEHOLDER_HTML


def _nutrition_line(label: str, text: str) -> str:
    return (
        f'<div class="nutrition-item"><strong>{html.escape(label)}:</strong> '
        f"{html.escape(text)}</div>"
    )


class MealPresenter:
    """
    Presents meal lookups on a render target.

    Every record is folded into the lunch and nutrition regions in
    order, so the last record wins regardless of its meal type. The
    nutrition region follows the last record that carries nutrition.

    Example:
        >>> presenter = MealPresenter(target)
        >>> presenter.render(RenderState.LOADING)
        >>> presenter.render(RenderState.CONTENT, meals, "2024-03-15")
    """

    def __init__(self, target: IRenderTarget) -> None:
        self.target = target

    @staticmethod
    def build_view(
        state: RenderState,
        meals: Sequence[MealRecord] = (),
        selected_date: str = "",
    ) -> RenderView:
        """
        Compute the full region state for ``state``.

        Content with no meals is presented as Error.
        """
        if state is RenderState.LOADING:
            return RenderView(state=state, loading_visible=True)

        if state is RenderState.ERROR or not meals:
            return RenderView(state=RenderState.ERROR, error_visible=True)

        lunch = PLACEHOLDER_HTML
        nutrition = PLACEHOLDER_HTML
        for meal in meals:
            if LUNCH_TYPE not in meal.meal_type:
                logger.debug("Rendering non-lunch meal as lunch", meal_type=meal.meal_type)
            lunch = dishes_html(meal)
            if meal.nutrition is not None:
                nutrition = nutrition_html(meal.nutrition)

        return RenderView(
            state=RenderState.CONTENT,
            date_header=f"{to_display(selected_date)} 급식 정보",
            lunch_html=lunch,
            nutrition_html=nutrition,
            content_visible=True,
        )

    def clear(self) -> None:
        """Hide loading, content and error regions."""
        for region in (Region.LOADING, Region.CONTENT, Region.ERROR):
            self.target.set_visible(region, False)

    def apply(self, view: RenderView) -> None:
        """Write ``view`` to the target, overwriting every region."""
        self.clear()
        self.target.set_text(Region.DATE_HEADER, view.date_header)
        self.target.set_html(Region.LUNCH, view.lunch_html)
        self.target.set_html(Region.NUTRITION, view.nutrition_html)
        self.target.set_visible(Region.LOADING, view.loading_visible)
        self.target.set_visible(Region.CONTENT, view.content_visible)
        self.target.set_visible(Region.ERROR, view.error_visible)

    def render(
        self,
        state: RenderState,
        meals: Sequence[MealRecord] = (),
        selected_date: str = "",
    ) -> RenderView:
        """Build the view for ``state`` and apply it.

        Returns:
            The applied view
        """
        view = self.build_view(state, meals, selected_date)
        self.apply(view)
        logger.debug("Rendered", state=view.state, meals=len(meals))
        return view
