"""Caption appearance options offered by the player UI.

Text is gathered from settings panels, menus and dialogs plus the labels
of color/range/select inputs, then tested against five phrase groups.
"""

import logging

from sce.domain import CaptionCustomizationResult, DetectedPlayer
from sce.page.interface import PageState

logger = logging.getLogger(__name__)

SETTINGS_SELECTORS = (
    '[class*="settings"]',
    '[class*="menu"]',
    '[class*="caption"]',
    '[class*="subtitle"]',
    '[class*="preferences"]',
    '[role="menu"]',
    '[role="dialog"]',
    "dialog",
)

SETTINGS_INPUT_SELECTOR = 'input[type="color"], input[type="range"], select'

FONT_SIZE = "font size"
FONT_COLOR = "font color"
BACKGROUND_COLOR = "background color"
OPACITY = "opacity"
POSITION = "position"

OPTION_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (FONT_SIZE, ("font size", "text size", "font-size", "fontsize")),
    (FONT_COLOR, ("font color", "text color", "font-color", "foreground color")),
    (BACKGROUND_COLOR, ("background color", "background-color", "bg color", "window color")),
    (OPACITY, ("opacity", "transparency", "background opacity")),
    (POSITION, ("position", "placement", "alignment")),
)


def detect_options(text: str) -> tuple[str, ...]:
    """Return the option names whose phrases occur in text."""
    lowered = text.lower()
    return tuple(
        name
        for name, phrases in OPTION_PATTERNS
        if any(phrase in lowered for phrase in phrases)
    )


async def check_caption_customization(
    page: PageState, player: DetectedPlayer
) -> CaptionCustomizationResult:
    """Look for caption styling options in the player's settings UI.

    The whole page is scanned when the container cannot be found.
    """
    container = await page.query_one(player.container_selector)

    chunks: list[str] = []
    for selector in SETTINGS_SELECTORS:
        for handle in await page.query_all(selector, scope=container):
            chunks.append((await page.snapshot(handle)).text)
    for handle in await page.query_all(SETTINGS_INPUT_SELECTOR, scope=container):
        snap = await page.snapshot(handle)
        chunks.append(snap.attr("aria-label") or snap.attr("name") or "")

    options = detect_options(" ".join(chunks))
    logger.debug("Caption customization options: %s", options)
    return CaptionCustomizationResult(
        has_font_size_control=FONT_SIZE in options,
        has_color_control=FONT_COLOR in options,
        has_background_control=BACKGROUND_COLOR in options,
        has_opacity_control=OPACITY in options,
        has_position_control=POSITION in options,
        detected_options=options,
    )
