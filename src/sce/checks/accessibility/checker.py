"""Run the four player accessibility heuristics together."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from sce.checks.accessibility.customization import check_caption_customization
from sce.checks.accessibility.focus import check_focus_indicators
from sce.checks.accessibility.keyboard import check_keyboard_navigation
from sce.checks.accessibility.naming import check_aria_labels
from sce.domain import (
    AriaLabelResult,
    CaptionCustomizationResult,
    DetectedPlayer,
    FocusIndicatorResult,
    KeyboardNavigationResult,
    PlayerAccessibilityResult,
)
from sce.page.interface import PageState, ScriptEvaluationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _isolated(name: str, check: Awaitable[T], default: T) -> T:
    """Await one heuristic, degrading to its default on evaluation errors."""
    try:
        return await check
    except ScriptEvaluationError as e:
        logger.warning("%s check failed, using empty result: %s", name, e)
        return default


async def check_player_accessibility(
    page: PageState, player: DetectedPlayer
) -> PlayerAccessibilityResult:
    """Run keyboard, naming, focus and customization checks concurrently.

    Args:
        page: Page-state collaborator.
        player: Primary detected player.

    Returns:
        Combined PlayerAccessibilityResult.

    Raises:
        PageClosedError: If the page goes away mid-check.
    """
    keyboard, naming, focus, customization = await asyncio.gather(
        _isolated(
            "Keyboard navigation",
            check_keyboard_navigation(page, player),
            KeyboardNavigationResult(),
        ),
        _isolated("ARIA label", check_aria_labels(page, player), AriaLabelResult()),
        _isolated(
            "Focus indicator",
            check_focus_indicators(page, player),
            FocusIndicatorResult(),
        ),
        _isolated(
            "Caption customization",
            check_caption_customization(page, player),
            CaptionCustomizationResult(),
        ),
    )
    return PlayerAccessibilityResult(
        keyboard_navigation=keyboard,
        aria_labels=naming,
        focus_indicators=focus,
        caption_customization=customization,
    )
