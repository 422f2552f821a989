"""
In-memory render target.

Holds the state of the page regions and serializes it as an HTML
document (for the web surface) or as plain text (for the CLI).
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Optional

import structlog

from school_meal.domain.meal.models import Region

logger = structlog.get_logger(__name__)

_TAG = re.compile(r"<[^>]+>")
_BLOCK_END = re.compile(r"</(li|p|div)>")

TOGGLED_REGIONS = (Region.LOADING, Region.CONTENT, Region.ERROR)


@dataclass
class RegionState:
    """Content and visibility of one region."""

    content: str = ""
    is_markup: bool = False
    visible: bool = True

    def as_html(self) -> str:
        return self.content if self.is_markup else html.escape(self.content)

    def as_text(self) -> str:
        if not self.is_markup:
            return self.content
        text = _BLOCK_END.sub("\n", self.content)
        return html.unescape(_TAG.sub("", text)).strip()


class PageRenderTarget:
    """
    Render target backed by plain Python state.

    Loading, content and error regions start hidden; an alert is kept
    until the page is serialized.

    Example:
        >>> target = PageRenderTarget()
        >>> target.set_text("meal-date", "2024년 3월 15일 금요일 급식 정보")
        >>> target.set_visible("meal-info", True)
        >>> assert target.is_visible("meal-info")
    """

    def __init__(self, selected_date: str = "") -> None:
        self.selected_date = selected_date
        self.alert_message: Optional[str] = None
        self._regions: dict[str, RegionState] = {
            region.value: RegionState(visible=region not in TOGGLED_REGIONS)
            for region in Region
        }

    def _region(self, region: str) -> RegionState:
        key = Region(region).value
        return self._regions[key]

    def set_text(self, region: str, text: str) -> None:
        state = self._region(region)
        state.content = text
        state.is_markup = False

    def set_html(self, region: str, markup: str) -> None:
        state = self._region(region)
        state.content = markup
        state.is_markup = True

    def set_visible(self, region: str, visible: bool) -> None:
        self._region(region).visible = visible

    def alert(self, message: str) -> None:
        logger.info("Alert raised", message=message)
        self.alert_message = message

    def is_visible(self, region: str) -> bool:
        return self._region(region).visible

    def content(self, region: str) -> str:
        return self._region(region).content

    def snapshot(self) -> dict[str, tuple[str, bool]]:
        """Content and visibility of every region, for comparisons."""
        return {key: (state.content, state.visible) for key, state in self._regions.items()}

    def to_text(self) -> str:
        """Plain-text rendering of the visible regions."""
        lines = []
        if self.alert_message:
            lines.append(self.alert_message)
        if self.is_visible(Region.LOADING):
            lines.append("불러오는 중...")
        if self.is_visible(Region.ERROR):
            lines.append("급식 정보를 불러올 수 없습니다.")
        if self.is_visible(Region.CONTENT):
            lines.append(self._region(Region.DATE_HEADER).as_text())
            lines.append("")
            lines.append("[중식]")
            lines.append(self._region(Region.LUNCH).as_text())
            lines.append("")
            lines.append("[영양정보]")
            lines.append(self._region(Region.NUTRITION).as_text())
        return "\n".join(lines)

    def to_html(self) -> str:
        """Serialize the page as an HTML document."""

        def hidden(region: Region) -> str:
            return "" if self.is_visible(region) else " hidden"

        alert_script = ""
        if self.alert_message:
            alert_script = f"<script>alert({_js_string(self.alert_message)});</script>"

        return f"""<!DOCTYPE html>
<html lang="ko">
<head>
<meta charset="utf-8">
<title>오늘의 급식</title>
<style>.hidden {{ display: none; }}</style>
</head>
<body>
<form method="get" action="/">
<input type="date" id="date-input" name="date" value="{html.escape(self.selected_date)}">
<button type="submit" id="search-btn">조회</button>
</form>
<div id="loading" class="loading{hidden(Region.LOADING)}">불러오는 중...</div>
<div id="error-message" class="error{hidden(Region.ERROR)}">급식 정보를 불러올 수 없습니다.</div>
<div id="meal-info" class="meal-info{hidden(Region.CONTENT)}">
<h2 id="meal-date">{self._region(Region.DATE_HEADER).as_html()}</h2>
<section><h3>중식</h3><div id="lunch">{self._region(Region.LUNCH).as_html()}</div></section>
<section><h3>영양정보</h3><div id="nutrition">{self._region(Region.NUTRITION).as_html()}</div></section>
</div>
{alert_script}
</body>
</html>
"""


def _js_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("<", "\\u003c")
    return f'"{escaped}"'
