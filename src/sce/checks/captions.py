"""Caption presence check.

Fuses three independent sources of caption evidence: sidecar <track>
elements in the DOM, subtitle renditions declared in intercepted
manifests, and text tracks exposed through the HTMLMediaElement API.
"""

import asyncio
import logging
from collections.abc import Sequence

from sce.checks.tracks import collect_dom_tracks
from sce.domain import CaptionCheckResult, ManifestInfo, ManifestTrack, PlayerApiTrackInfo
from sce.page.interface import PageState, ScriptEvaluationError

logger = logging.getLogger(__name__)

CAPTION_TRACK_SELECTOR = 'track[kind="captions"], track[kind="subtitles"]'

CAPTION_KINDS = frozenset({"captions", "subtitles"})

_TEXT_TRACKS_SCRIPT = """
() => {
  const results = [];
  document.querySelectorAll('video, audio').forEach((media) => {
    const tracks = media.textTracks || [];
    for (let i = 0; i < tracks.length; i++) {
      const track = tracks[i];
      results.push({
        label: track.label || null,
        language: track.language || null,
        kind: track.kind || null,
      });
    }
  });
  return results;
}
"""


async def collect_player_api_tracks(page: PageState) -> tuple[PlayerApiTrackInfo, ...]:
    """Read caption/subtitle text tracks from every media element.

    Returns an empty tuple when the page has no script runtime.
    """
    try:
        raw_tracks = await page.evaluate(_TEXT_TRACKS_SCRIPT)
    except ScriptEvaluationError as e:
        logger.debug("Text track API unavailable: %s", e)
        return ()
    return tuple(
        PlayerApiTrackInfo(
            label=track.get("label"),
            language=track.get("language"),
            kind=track.get("kind"),
        )
        for track in raw_tracks or []
        if track.get("kind") in CAPTION_KINDS
    )


def manifest_caption_tracks(manifests: Sequence[ManifestInfo]) -> tuple[ManifestTrack, ...]:
    """Flatten the subtitle renditions of every manifest."""
    return tuple(track for m in manifests for track in m.subtitle_tracks)


async def check_captions(
    page: PageState, manifests: Sequence[ManifestInfo]
) -> CaptionCheckResult:
    """Determine whether captions are available and language-tagged.

    Args:
        page: Page-state collaborator.
        manifests: Manifests parsed during this analysis.

    Returns:
        CaptionCheckResult with the evidence from each source.
    """
    dom_tracks, api_tracks = await asyncio.gather(
        collect_dom_tracks(page, CAPTION_TRACK_SELECTOR),
        collect_player_api_tracks(page),
    )
    manifest_tracks = manifest_caption_tracks(manifests)

    languages = (
        [t.srclang for t in dom_tracks]
        + [t.language for t in manifest_tracks]
        + [t.language for t in api_tracks]
    )
    has_captions = bool(languages)

    logger.debug(
        "Caption evidence: %d DOM, %d manifest, %d API track(s)",
        len(dom_tracks),
        len(manifest_tracks),
        len(api_tracks),
    )
    return CaptionCheckResult(
        dom_tracks=dom_tracks,
        manifest_tracks=manifest_tracks,
        player_api_tracks=api_tracks,
        has_captions=has_captions,
        has_language_attributes=all(languages),
    )
