"""Keyboard reachability of player controls.

Interactive descendants of the player container are split into focusable
controls (tabIndex >= 0) and unreachable ones. Focusable controls are
classified by matching their text, aria-label, title and class names
against per-category patterns; the first matching category wins.
"""

import logging
import re

from sce.domain import DetectedPlayer, KeyboardNavigationResult
from sce.page.dom import is_hidden
from sce.page.interface import ElementSnapshot, PageState

logger = logging.getLogger(__name__)

INTERACTIVE_SELECTOR = (
    'button, [role="button"], input[type="range"], [tabindex], a[href], '
    '[role="slider"], [role="menuitem"]'
)

PLAY_CONTROL = "play/pause"
CAPTIONS_CONTROL = "captions toggle"
AD_CONTROL = "audio description"

CONTROL_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (PLAY_CONTROL, re.compile(r"play|pause", re.IGNORECASE)),
    (CAPTIONS_CONTROL, re.compile(r"caption|subtitle|cc|closed.?caption", re.IGNORECASE)),
    (AD_CONTROL, re.compile(r"audio.?desc|described|^ad$", re.IGNORECASE)),
    ("volume", re.compile(r"volume|mute|sound", re.IGNORECASE)),
    ("fullscreen", re.compile(r"fullscreen|full.?screen|expand", re.IGNORECASE)),
    ("timeline/seek", re.compile(r"seek|timeline|progress|scrub", re.IGNORECASE)),
)

MAX_LABEL_LENGTH = 50


def describe_control(snap: ElementSnapshot) -> str:
    """Combine the strings that identify what a control does."""
    parts = (
        snap.text,
        snap.attr("aria-label"),
        snap.attr("title"),
        " ".join(snap.classes),
    )
    return " ".join(part for part in parts if part)


def classify_control(description: str) -> str | None:
    """Return the first control category whose pattern matches."""
    for name, pattern in CONTROL_PATTERNS:
        if pattern.search(description):
            return name
    return None


def _unreachable_label(snap: ElementSnapshot) -> str:
    return snap.attr("aria-label") or snap.text[:MAX_LABEL_LENGTH] or snap.tag_name


async def check_keyboard_navigation(
    page: PageState, player: DetectedPlayer
) -> KeyboardNavigationResult:
    """Assess whether the player's controls can be reached by Tab.

    Args:
        page: Page-state collaborator.
        player: Player whose container is inspected.

    Returns:
        KeyboardNavigationResult; defaults when the container is missing.
    """
    container = await page.query_one(player.container_selector)
    if container is None:
        logger.debug("Keyboard check: container %s not found", player.container_selector)
        return KeyboardNavigationResult()

    focusable: list[ElementSnapshot] = []
    unfocusable: list[ElementSnapshot] = []
    for handle in await page.query_all(INTERACTIVE_SELECTOR, scope=container):
        snap = await page.snapshot(handle)
        if await is_hidden(page, handle, snap):
            continue
        if snap.tab_index >= 0:
            focusable.append(snap)
        else:
            unfocusable.append(snap)

    tab_stops: dict[str, int] = {}
    reachable: list[str] = []
    for position, snap in enumerate(focusable, start=1):
        description = describe_control(snap)
        category = classify_control(description)
        if category is None:
            reachable.append(description[:MAX_LABEL_LENGTH] or snap.tag_name)
            continue
        tab_stops.setdefault(category, position)
        reachable.append(category)

    return KeyboardNavigationResult(
        can_tab_into_player=bool(focusable),
        reachable_controls=tuple(reachable),
        unreachable_controls=tuple(_unreachable_label(s) for s in unfocusable),
        tab_stops_to_play=tab_stops.get(PLAY_CONTROL, -1),
        tab_stops_to_captions=tab_stops.get(CAPTIONS_CONTROL, -1),
        tab_stops_to_ad=tab_stops.get(AD_CONTROL, -1),
        controls_activatable_with_keyboard=any(
            s.tag_name == "button" or s.attr("role") == "button" for s in focusable
        ),
    )
