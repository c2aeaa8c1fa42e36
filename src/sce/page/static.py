"""PageState implementation over a saved HTML document.

StaticPage lets the compliance checks run against an HTML snapshot with
no browser. It has no script runtime and no stylesheet cascade: computed
styles come from inline style declarations only, and tab order follows
the browser's default focusability rules.
"""

import logging
import re
from typing import Any

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from sce.page.interface import ElementSnapshot, ScriptEvaluationError

logger = logging.getLogger(__name__)

# Elements that are keyboard focusable without an explicit tabindex
_FOCUSABLE_TAGS = frozenset({"button", "select", "textarea", "summary", "iframe"})

# Initial values reported when no inline declaration applies
_STYLE_DEFAULTS = {
    "position": "static",
    "display": "inline",
    "visibility": "visible",
    "outline-style": "none",
    "outline-width": "0px",
    "outline-color": "currentcolor",
    "box-shadow": "none",
}

_OUTLINE_STYLES = frozenset(
    {
        "none",
        "auto",
        "dotted",
        "dashed",
        "solid",
        "double",
        "groove",
        "ridge",
        "inset",
        "outset",
        "hidden",
    }
)
_WIDTH_RE = re.compile(r"^(?:thin|medium|thick|\d*\.?\d+[a-z%]*)$", re.IGNORECASE)


def parse_inline_style(style: str | None) -> dict[str, str]:
    """Parse a style attribute into lower-cased property/value pairs.

    The outline shorthand is expanded into outline-style and
    outline-width.
    """
    declarations: dict[str, str] = {}
    for declaration in (style or "").split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.replace("!important", "").strip()
        if not name:
            continue
        declarations[name] = value

        if name == "outline":
            for token in value.split():
                lowered = token.lower()
                if lowered in _OUTLINE_STYLES:
                    declarations["outline-style"] = lowered
                elif _WIDTH_RE.match(lowered):
                    declarations["outline-width"] = lowered
    return declarations


def _default_tab_index(tag: Tag) -> int:
    name = tag.name.lower()
    if name in _FOCUSABLE_TAGS:
        return 0
    if name == "input":
        return -1 if (tag.get("type") or "").lower() == "hidden" else 0
    if name == "a" and tag.has_attr("href"):
        return 0
    if name in ("video", "audio") and tag.has_attr("controls"):
        return 0
    if tag.has_attr("contenteditable"):
        return 0
    return -1


def _tab_index(tag: Tag) -> int:
    raw = tag.get("tabindex")
    if raw is not None:
        try:
            return int(str(raw).strip())
        except ValueError:
            pass
    return _default_tab_index(tag)


def _hides_itself(tag: Tag) -> bool:
    if tag.has_attr("hidden"):
        return True
    if tag.name.lower() == "input" and (tag.get("type") or "").lower() == "hidden":
        return True
    style = parse_inline_style(tag.get("style"))
    return (
        style.get("display", "").lower() == "none"
        or style.get("visibility", "").lower() == "hidden"
    )


def _attributes(tag: Tag) -> dict[str, str]:
    attrs = {}
    for name, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        attrs[name] = str(value)
    return attrs


class StaticPage:
    """PageState over a BeautifulSoup document.

    Example:
        page = StaticPage.from_html(html)
        players = await detect_players(page)
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_html(cls, html: str) -> "StaticPage":
        """Parse markup with the standard library HTML parser."""
        return cls(BeautifulSoup(html, "html.parser"))

    async def evaluate(self, expression: str) -> Any:
        raise ScriptEvaluationError("Static snapshots have no script runtime")

    async def query_all(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        root = scope if scope is not None else self._soup
        try:
            return list(root.select(selector))
        except SelectorSyntaxError as e:
            raise ScriptEvaluationError(f"Invalid selector {selector!r}: {e}") from e

    async def query_one(self, selector: str, scope: Tag | None = None) -> Tag | None:
        matches = await self.query_all(selector, scope)
        return matches[0] if matches else None

    async def snapshot(self, element: Tag) -> ElementSnapshot:
        tag_name = element.name.lower()

        siblings = [element]
        parent = element.parent
        if parent is not None:
            siblings = [
                child
                for child in parent.find_all(element.name, recursive=False)
                if isinstance(child, Tag)
            ]
        type_index = next(
            (i for i, sibling in enumerate(siblings, 1) if sibling is element), 1
        )

        src = element.get("src")
        if not src and tag_name in ("video", "audio"):
            source = element.find("source", src=True)
            src = source.get("src") if source is not None else None

        return ElementSnapshot(
            tag_name=tag_name,
            id=element.get("id") or None,
            classes=tuple(element.get("class") or ()),
            attributes=_attributes(element),
            text=element.get_text().strip(),
            tab_index=_tab_index(element),
            rendered=self._is_rendered(element),
            src=src or None,
            type_index=type_index,
            type_count=len(siblings),
        )

    def _is_rendered(self, element: Tag) -> bool:
        if element.name.lower() in ("html", "body"):
            return False
        style = parse_inline_style(element.get("style"))
        if style.get("position", "").lower() == "fixed":
            return False
        current: Tag | None = element
        while current is not None and not isinstance(current, BeautifulSoup):
            if _hides_itself(current):
                return False
            current = current.parent
        return True

    async def parent(self, element: Tag) -> Tag | None:
        parent = element.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return parent

    async def computed_style(self, element: Tag, properties: list[str]) -> dict[str, str]:
        inline = parse_inline_style(element.get("style"))
        return {
            prop: inline.get(prop, _STYLE_DEFAULTS.get(prop, "")) for prop in properties
        }

    async def focus(self, element: Tag) -> None:
        logger.debug("Ignoring focus on <%s> in static snapshot", element.name)

    async def blur(self, element: Tag) -> None:
        pass
