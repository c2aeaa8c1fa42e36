"""Analysis orchestration.

analyze_page() sequences the checks against any PageState and maps the
evidence onto Clause 7 findings. Detection and the caption/AD checks are
independent and run concurrently; the accessibility heuristics need the
primary player and run afterwards.
"""

import asyncio
import logging
from collections.abc import Sequence

from sce.analysis.exceptions import AnalysisError
from sce.checks import check_audio_description, check_captions, check_player_accessibility
from sce.clause7 import map_to_clause7
from sce.detection import detect_players
from sce.domain import ManifestInfo, StreamingAnalysisResult
from sce.logging import analysis_context
from sce.manifest import InterceptedManifest, parse_manifests
from sce.page import PageState, PageStateError, StaticPage

logger = logging.getLogger(__name__)


async def analyze_page(
    page: PageState, manifests: Sequence[ManifestInfo] = ()
) -> StreamingAnalysisResult:
    """Run the full streaming analysis against a page.

    Args:
        page: Page-state collaborator.
        manifests: Manifests parsed from this page load.

    Returns:
        StreamingAnalysisResult with one finding per Clause 7 rule.

    Raises:
        AnalysisError: If the page-state collaborator fails outright.
    """
    manifests = tuple(manifests)
    try:
        players, captions, audio_description = await asyncio.gather(
            detect_players(page),
            check_captions(page, manifests),
            check_audio_description(page, manifests),
        )
        accessibility = None
        if players:
            accessibility = await check_player_accessibility(page, players[0])
    except PageStateError as e:
        raise AnalysisError(f"Page became unavailable during analysis: {e}") from e

    findings = map_to_clause7(
        captions=captions,
        audio_description=audio_description,
        accessibility=accessibility,
        manifests=manifests,
        player_detected=bool(players),
    )
    result = StreamingAnalysisResult(
        players=tuple(players),
        captions=captions,
        audio_description=audio_description,
        player_accessibility=accessibility,
        manifests=manifests,
        findings=findings,
    )
    logger.info(
        "Analysis complete: player=%s, %d manifest(s), summary=%s",
        result.player_type,
        len(manifests),
        result.summary,
    )
    return result


async def analyze_snapshot(
    html: str,
    manifests: Sequence[InterceptedManifest] = (),
    source: str = "snapshot",
) -> StreamingAnalysisResult:
    """Analyze a saved HTML document with optional captured manifests.

    Args:
        html: Page markup.
        manifests: Manifest records captured with the page.
        source: Label for log context (usually the file path).

    Returns:
        StreamingAnalysisResult for the snapshot.
    """
    with analysis_context(source):
        parsed = parse_manifests(manifests)
        return await analyze_page(StaticPage.from_html(html), parsed)
