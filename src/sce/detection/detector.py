"""Player detection.

detect_players() runs every probe in SDK_PROBES against the page and
enumerates native media elements. Each probe half (global expression,
DOM marker, version lookup, container lookup) is isolated: a failing
expression counts as "not detected" and never stops the other probes.
A closed page is not isolated and propagates.
"""

import logging

from sce.detection.probes import SDK_PROBES, PlayerProbe
from sce.domain import DetectedPlayer, MediaElementInfo, PlayerSDK
from sce.page.dom import control_locator, element_path
from sce.page.interface import ElementRef, PageState, ScriptEvaluationError

logger = logging.getLogger(__name__)

MEDIA_TRACK_SELECTOR = (
    'track[kind="captions"], track[kind="subtitles"], '
    'track[kind="descriptions"]'
)
NATIVE_CONTROL_SELECTOR = (
    'button, [role="button"], input[type="range"], [role="slider"]'
)
FALLBACK_CONTAINER = "body"


async def _evaluates_truthy(page: PageState, expression: str | None) -> bool:
    if expression is None:
        return False
    try:
        return bool(await page.evaluate(expression))
    except ScriptEvaluationError as e:
        logger.debug("Probe expression failed (%s): %s", expression, e)
        return False


async def _selector_matches(page: PageState, selector: str | None) -> bool:
    if selector is None:
        return False
    try:
        return await page.query_one(selector) is not None
    except ScriptEvaluationError as e:
        logger.debug("Probe selector failed (%s): %s", selector, e)
        return False


async def _probe_version(page: PageState, probe: PlayerProbe) -> str | None:
    if probe.version_expression is None:
        return None
    try:
        version = await page.evaluate(probe.version_expression)
    except ScriptEvaluationError as e:
        logger.debug("Version lookup for %s failed: %s", probe.sdk.value, e)
        return None
    if version is None or version is False or version == "":
        return None
    return str(version)


async def run_probe(page: PageState, probe: PlayerProbe) -> bool:
    """Return True if the probe's global or DOM marker is present."""
    if await _evaluates_truthy(page, probe.global_expression):
        return True
    return await _selector_matches(page, probe.marker_selector)


async def _enumerate_media(page: PageState) -> list[tuple[ElementRef, MediaElementInfo]]:
    elements: list[tuple[ElementRef, MediaElementInfo]] = []
    try:
        for tag in ("video", "audio"):
            for handle in await page.query_all(tag):
                snap = await page.snapshot(handle)
                tracks = await page.query_all(MEDIA_TRACK_SELECTOR, scope=handle)
                info = MediaElementInfo(
                    tag_name=tag,
                    selector=await element_path(page, handle),
                    src=snap.src,
                    has_tracks=bool(tracks),
                    track_count=len(tracks),
                )
                elements.append((handle, info))
    except ScriptEvaluationError as e:
        logger.warning("Media element enumeration failed: %s", e)
        return []
    return elements


async def detect_media_elements(page: PageState) -> tuple[MediaElementInfo, ...]:
    """Enumerate <video> then <audio> elements with their sidecar tracks."""
    return tuple(info for _, info in await _enumerate_media(page))


async def find_native_container(
    page: PageState, media: ElementRef, media_selector: str
) -> str:
    """Locate the nearest ancestor of media that also holds player controls.

    The walk stops below <body>. When no ancestor qualifies, the media
    element's own locator is returned.
    """
    try:
        current = await page.parent(media)
        while current is not None:
            snap = await page.snapshot(current)
            if snap.tag_name == "body":
                break
            if await page.query_one(NATIVE_CONTROL_SELECTOR, scope=current):
                return control_locator(snap)
            current = await page.parent(current)
    except ScriptEvaluationError as e:
        logger.debug("Native container lookup failed: %s", e)
    return media_selector


async def detect_players(page: PageState) -> list[DetectedPlayer]:
    """Detect player technologies on the page.

    Args:
        page: Page-state collaborator.

    Returns:
        Detected players in probe order; the first is the primary player.
        A single native player is synthesized when no SDK matched but
        media elements exist.

    Raises:
        PageClosedError: If the page goes away during detection.
    """
    enumerated = await _enumerate_media(page)
    media_elements = tuple(info for _, info in enumerated)
    players: list[DetectedPlayer] = []

    for probe in SDK_PROBES:
        if not await run_probe(page, probe):
            continue
        version = await _probe_version(page, probe)
        container = (
            probe.container_selector
            if await _selector_matches(page, probe.container_selector)
            else FALLBACK_CONTAINER
        )
        logger.info(
            "Detected %s player (version=%s, container=%s)",
            probe.sdk.value,
            version,
            container,
        )
        players.append(
            DetectedPlayer(
                sdk=probe.sdk,
                container_selector=container,
                version=version,
                media_elements=media_elements,
            )
        )

    if not players and enumerated:
        handle, first = enumerated[0]
        container = await find_native_container(page, handle, first.selector)
        logger.info("Detected native %s player (container=%s)", first.tag_name, container)
        players.append(
            DetectedPlayer(
                sdk=PlayerSDK.NATIVE,
                container_selector=container,
                media_elements=media_elements,
            )
        )

    if not players:
        logger.info("No media player detected")
    return players
