"""Audio description presence check.

AD evidence comes from descriptions tracks in the DOM, AD renditions in
the manifests, and a UI heuristic that looks for an audio description
selector in the player's menus and buttons.
"""

import asyncio
import logging
import re
from collections.abc import Sequence

from sce.checks.tracks import collect_dom_tracks
from sce.domain import AudioDescriptionCheckResult, ManifestAudioTrack, ManifestInfo
from sce.page.interface import PageState, ScriptEvaluationError

logger = logging.getLogger(__name__)

DESCRIPTION_TRACK_SELECTOR = 'track[kind="descriptions"]'

AD_SELECTOR_ELEMENTS = (
    'button, [role="menuitemradio"], [role="menuitem"], [role="option"], label, span'
)

AD_PHRASES = (
    "audio description",
    "audio-description",
    "audiodescription",
    "described video",
    "descriptive audio",
)

# The bare abbreviation only counts as a standalone upper-case word
_AD_ABBREVIATION = re.compile(r"(?<![A-Za-z0-9])AD(?![A-Za-z0-9])")


def mentions_audio_description(text: str) -> bool:
    """Return True if text names an audio description option."""
    lowered = text.lower()
    if any(phrase in lowered for phrase in AD_PHRASES):
        return True
    return _AD_ABBREVIATION.search(text) is not None


async def has_audio_description_selector(page: PageState) -> bool:
    """Scan buttons, menu items and labels for an AD option."""
    try:
        for handle in await page.query_all(AD_SELECTOR_ELEMENTS):
            snap = await page.snapshot(handle)
            combined = f"{snap.text} {snap.attr('aria-label') or ''}"
            if mentions_audio_description(combined):
                logger.debug("Found AD selector on <%s>: %s", snap.tag_name, combined[:60])
                return True
    except ScriptEvaluationError as e:
        logger.warning("AD selector scan failed: %s", e)
    return False


def manifest_audio_description_tracks(
    manifests: Sequence[ManifestInfo],
) -> tuple[ManifestAudioTrack, ...]:
    """Flatten the AD audio renditions of every manifest."""
    return tuple(track for m in manifests for track in m.audio_description_tracks)


async def check_audio_description(
    page: PageState, manifests: Sequence[ManifestInfo]
) -> AudioDescriptionCheckResult:
    """Determine whether audio description is offered.

    Args:
        page: Page-state collaborator.
        manifests: Manifests parsed during this analysis.

    Returns:
        AudioDescriptionCheckResult; has_ad_selector is reported
        independently of track evidence.
    """
    dom_tracks, has_selector = await asyncio.gather(
        collect_dom_tracks(page, DESCRIPTION_TRACK_SELECTOR),
        has_audio_description_selector(page),
    )
    manifest_tracks = manifest_audio_description_tracks(manifests)

    return AudioDescriptionCheckResult(
        dom_description_tracks=dom_tracks,
        manifest_ad_tracks=manifest_tracks,
        has_audio_description=bool(dom_tracks or manifest_tracks or has_selector),
        has_ad_selector=has_selector,
    )
