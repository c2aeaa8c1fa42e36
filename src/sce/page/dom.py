"""DOM helpers shared by the detectors and checkers.

Built on the PageState protocol only, so they behave the same against a
live page and a static snapshot.
"""

import soupsieve

from sce.page.interface import ElementRef, ElementSnapshot, PageState

# Tags whose closest ancestor owns a sidecar <track>
MEDIA_TAGS = frozenset({"video", "audio"})


async def element_path(
    page: PageState, element: ElementRef, *, nth_of_type: bool = True
) -> str:
    """Build a locator for element from its ancestor chain.

    Elements with an id resolve to '#id'. Otherwise the parent's locator
    is joined with ' > tag', adding ':nth-of-type(n)' when nth_of_type is
    set and same-tag siblings exist.
    """
    snap = await page.snapshot(element)
    if snap.id:
        return hash_selector(snap.id)

    step = snap.tag_name
    if nth_of_type and snap.type_count > 1:
        step = f"{step}:nth-of-type({snap.type_index})"

    parent = await page.parent(element)
    if parent is None:
        return snap.tag_name
    return f"{await element_path(page, parent, nth_of_type=nth_of_type)} > {step}"


def control_locator(snap: ElementSnapshot) -> str:
    """Return '#id', else 'tag.class1.class2', else the bare tag."""
    if snap.id:
        return hash_selector(snap.id)
    classes = ".".join(soupsieve.escape(name) for name in snap.classes[:2])
    return f"{snap.tag_name}.{classes}" if classes else snap.tag_name


async def closest(
    page: PageState, element: ElementRef, tags: frozenset[str]
) -> ElementRef | None:
    """Return the nearest ancestor whose tag is in tags, or None."""
    current = await page.parent(element)
    while current is not None:
        snap = await page.snapshot(current)
        if snap.tag_name in tags:
            return current
        current = await page.parent(current)
    return None


async def is_hidden(
    page: PageState, element: ElementRef, snap: ElementSnapshot
) -> bool:
    """Return True for elements without a layout box that are not fixed."""
    if snap.rendered:
        return False
    style = await page.computed_style(element, ["position"])
    return style.get("position") != "fixed"


def id_selector(element_id: str) -> str:
    """Return an attribute selector matching an arbitrary id value."""
    escaped = element_id.replace("\\", "\\\\").replace('"', '\\"')
    return f'[id="{escaped}"]'


def hash_selector(element_id: str) -> str:
    """Return '#id' with the id escaped as a CSS identifier.

    Ids such as ':r1:', 'player:1' or '1-label' are valid HTML but need
    escaping before they can appear after '#'.
    """
    return f"#{soupsieve.escape(element_id)}"
