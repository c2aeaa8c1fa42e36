"""Accessible names of the player container and its controls."""

import logging

from sce.domain import AriaButtonInfo, AriaLabelResult, DetectedPlayer
from sce.page.dom import MEDIA_TAGS, control_locator, id_selector
from sce.page.interface import ElementSnapshot, PageState

logger = logging.getLogger(__name__)

NAMED_CONTROL_SELECTOR = 'button, [role="button"], [role="slider"]'


async def resolve_accessible_name(page: PageState, snap: ElementSnapshot) -> str | None:
    """Resolve an accessible name.

    Priority: aria-label, then the text of the aria-labelledby targets,
    then text content, then title. A labelledby reference that points at
    no element resolves to the raw reference string.
    """
    aria_label = snap.attr("aria-label")
    if aria_label:
        return aria_label

    labelledby = snap.attr("aria-labelledby")
    if labelledby:
        found = False
        texts = []
        for ref in labelledby.split():
            target = await page.query_one(id_selector(ref))
            if target is None:
                continue
            found = True
            texts.append((await page.snapshot(target)).text)
        if not found:
            return labelledby
        return " ".join(t for t in texts if t) or None

    if snap.text:
        return snap.text
    return snap.attr("title") or None


async def check_aria_labels(page: PageState, player: DetectedPlayer) -> AriaLabelResult:
    """Partition the player's controls into labeled and unlabeled."""
    container = await page.query_one(player.container_selector)
    if container is None:
        logger.debug("Naming check: container %s not found", player.container_selector)
        return AriaLabelResult()

    container_snap = await page.snapshot(container)
    player_has_role = (
        container_snap.attr("role") is not None or container_snap.tag_name in MEDIA_TAGS
    )
    player_has_name = any(
        container_snap.attr(name) is not None
        for name in ("aria-label", "aria-labelledby", "title")
    )

    labeled: list[AriaButtonInfo] = []
    unlabeled: list[AriaButtonInfo] = []
    for handle in await page.query_all(NAMED_CONTROL_SELECTOR, scope=container):
        snap = await page.snapshot(handle)
        info = AriaButtonInfo(
            selector=control_locator(snap),
            accessible_name=await resolve_accessible_name(page, snap),
            role=snap.attr("role") or ("button" if snap.tag_name == "button" else None),
        )
        if info.accessible_name:
            labeled.append(info)
        else:
            unlabeled.append(info)

    return AriaLabelResult(
        labeled_buttons=tuple(labeled),
        unlabeled_buttons=tuple(unlabeled),
        player_has_role=player_has_role,
        player_has_accessible_name=player_has_name,
    )
