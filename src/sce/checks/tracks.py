"""Sidecar <track> evidence shared by the caption and AD checkers."""

import logging

from sce.domain import DomTrackInfo
from sce.page.dom import MEDIA_TAGS, closest, element_path
from sce.page.interface import PageState, ScriptEvaluationError

logger = logging.getLogger(__name__)

UNKNOWN_PARENT = "unknown"


async def collect_dom_tracks(page: PageState, selector: str) -> tuple[DomTrackInfo, ...]:
    """Collect <track> elements matching selector with their media owner.

    Args:
        page: Page-state collaborator.
        selector: Track selector, e.g. 'track[kind="descriptions"]'.

    Returns:
        Track evidence in document order; empty if the page query fails.
    """
    tracks: list[DomTrackInfo] = []
    try:
        for handle in await page.query_all(selector):
            snap = await page.snapshot(handle)
            owner = await closest(page, handle, MEDIA_TAGS)
            parent_selector = (
                await element_path(page, owner, nth_of_type=False)
                if owner is not None
                else UNKNOWN_PARENT
            )
            tracks.append(
                DomTrackInfo(
                    kind=snap.attr("kind") or "",
                    src=snap.attr("src") or None,
                    srclang=snap.attr("srclang") or None,
                    label=snap.attr("label") or None,
                    parent_selector=parent_selector,
                )
            )
    except ScriptEvaluationError as e:
        logger.warning("Track query %r failed: %s", selector, e)
        return ()
    return tuple(tracks)
