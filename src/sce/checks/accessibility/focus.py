"""Visible focus indicators on player controls."""

import logging
import re

from sce.domain import DetectedPlayer, FocusIndicatorResult
from sce.page.dom import is_hidden
from sce.page.interface import ElementSnapshot, PageState

logger = logging.getLogger(__name__)

FOCUSABLE_SELECTOR = (
    'button, [role="button"], input[type="range"], [tabindex="0"], a[href]'
)

FOCUS_STYLE_PROPERTIES = ["outline-style", "outline-width", "box-shadow"]

_KEYWORD_WIDTHS = {"thin": 1.0, "medium": 3.0, "thick": 5.0}
_LENGTH_RE = re.compile(r"^\s*(-?\d*\.?\d+)")

MAX_LABEL_LENGTH = 30


def parse_width(value: str | None) -> float:
    """Return the numeric part of a CSS width, or 0.0."""
    if not value:
        return 0.0
    keyword = _KEYWORD_WIDTHS.get(value.strip().lower())
    if keyword is not None:
        return keyword
    match = _LENGTH_RE.match(value)
    return float(match.group(1)) if match else 0.0


def has_focus_indicator(style: dict[str, str]) -> bool:
    """Return True if a focused element's styles show an outline or shadow."""
    outline_style = style.get("outline-style", "none")
    has_outline = outline_style != "none" and parse_width(style.get("outline-width")) > 0
    box_shadow = style.get("box-shadow", "")
    return has_outline or box_shadow not in ("none", "")


def _label(snap: ElementSnapshot) -> str:
    return snap.attr("aria-label") or snap.text[:MAX_LABEL_LENGTH] or snap.tag_name


async def check_focus_indicators(
    page: PageState, player: DetectedPlayer
) -> FocusIndicatorResult:
    """Focus each visible control and inspect its focused styles."""
    container = await page.query_one(player.container_selector)
    if container is None:
        logger.debug("Focus check: container %s not found", player.container_selector)
        return FocusIndicatorResult()

    with_indicator: list[str] = []
    without_indicator: list[str] = []
    for handle in await page.query_all(FOCUSABLE_SELECTOR, scope=container):
        snap = await page.snapshot(handle)
        if await is_hidden(page, handle, snap):
            continue

        await page.focus(handle)
        try:
            style = await page.computed_style(handle, FOCUS_STYLE_PROPERTIES)
        finally:
            await page.blur(handle)

        if has_focus_indicator(style):
            with_indicator.append(_label(snap))
        else:
            without_indicator.append(_label(snap))

    return FocusIndicatorResult(
        controls_with_focus_indicator=tuple(with_indicator),
        controls_without_focus_indicator=tuple(without_indicator),
    )
