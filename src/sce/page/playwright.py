"""Playwright-backed PageState and manifest interception.

PlaywrightPage adapts a playwright.async_api.Page to the PageState
protocol. ManifestInterceptor listens to network responses during page
load and keeps every HLS/DASH manifest body it sees.
"""

import asyncio
import logging
from typing import Any

from playwright.async_api import ElementHandle, Page, Response
from playwright.async_api import Error as PlaywrightError

from sce.domain import ManifestFormat
from sce.manifest import InterceptedManifest, classify_manifest
from sce.page.interface import (
    ElementSnapshot,
    PageClosedError,
    PageStateError,
    ScriptEvaluationError,
)

logger = logging.getLogger(__name__)

_SNAPSHOT_SCRIPT = """
el => {
  const parent = el.parentElement;
  const siblings = parent
    ? Array.from(parent.children).filter(c => c.tagName === el.tagName)
    : [el];
  const attributes = {};
  for (const attr of Array.from(el.attributes)) {
    attributes[attr.name] = attr.value;
  }
  const source = el.querySelector ? el.querySelector('source') : null;
  return {
    tag_name: el.tagName.toLowerCase(),
    id: el.id || null,
    classes: Array.from(el.classList || []),
    attributes,
    text: (el.textContent || '').trim(),
    tab_index: typeof el.tabIndex === 'number' ? el.tabIndex : -1,
    rendered: el.offsetParent !== null && el.offsetParent !== undefined,
    src: el.src || (source && source.src) || null,
    type_index: siblings.indexOf(el) + 1,
    type_count: siblings.length,
  };
}
"""

_COMPUTED_STYLE_SCRIPT = """
(el, properties) => {
  const style = getComputedStyle(el);
  const result = {};
  for (const prop of properties) result[prop] = style.getPropertyValue(prop);
  return result;
}
"""


class PlaywrightPage:
    """PageState over a live Playwright page."""

    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def page(self) -> Page:
        """The wrapped Playwright page."""
        return self._page

    def _translate(self, error: PlaywrightError, action: str) -> PageStateError:
        message = str(error)
        if self._page.is_closed() or "has been closed" in message:
            return PageClosedError(f"Page closed during {action}: {message}")
        return ScriptEvaluationError(f"{action} failed: {message}")

    async def evaluate(self, expression: str) -> Any:
        try:
            return await self._page.evaluate(expression)
        except PlaywrightError as e:
            raise self._translate(e, "evaluate") from e

    async def query_all(
        self, selector: str, scope: ElementHandle | None = None
    ) -> list[ElementHandle]:
        root = scope if scope is not None else self._page
        try:
            return await root.query_selector_all(selector)
        except PlaywrightError as e:
            raise self._translate(e, f"query {selector!r}") from e

    async def query_one(
        self, selector: str, scope: ElementHandle | None = None
    ) -> ElementHandle | None:
        root = scope if scope is not None else self._page
        try:
            return await root.query_selector(selector)
        except PlaywrightError as e:
            raise self._translate(e, f"query {selector!r}") from e

    async def snapshot(self, element: ElementHandle) -> ElementSnapshot:
        try:
            data = await element.evaluate(_SNAPSHOT_SCRIPT)
        except PlaywrightError as e:
            raise self._translate(e, "snapshot") from e
        return ElementSnapshot(
            tag_name=data["tag_name"],
            id=data["id"],
            classes=tuple(data["classes"]),
            attributes=data["attributes"],
            text=data["text"],
            tab_index=data["tab_index"],
            rendered=data["rendered"],
            src=data["src"],
            type_index=data["type_index"],
            type_count=data["type_count"],
        )

    async def parent(self, element: ElementHandle) -> ElementHandle | None:
        try:
            handle = await element.evaluate_handle("el => el.parentElement")
        except PlaywrightError as e:
            raise self._translate(e, "parent lookup") from e
        return handle.as_element()

    async def computed_style(
        self, element: ElementHandle, properties: list[str]
    ) -> dict[str, str]:
        try:
            return await element.evaluate(_COMPUTED_STYLE_SCRIPT, properties)
        except PlaywrightError as e:
            raise self._translate(e, "computed style") from e

    async def focus(self, element: ElementHandle) -> None:
        try:
            await element.evaluate("el => el.focus()")
        except PlaywrightError as e:
            raise self._translate(e, "focus") from e

    async def blur(self, element: ElementHandle) -> None:
        try:
            await element.evaluate("el => el.blur()")
        except PlaywrightError as e:
            raise self._translate(e, "blur") from e


class ManifestInterceptor:
    """Records HLS/DASH manifest responses seen by a Playwright page.

    Attach before navigation so that manifests requested during load are
    captured, then await drain() before reading the records.
    """

    def __init__(self) -> None:
        self._records: list[InterceptedManifest] = []
        self._pending: set[asyncio.Task[None]] = set()
        self._page: Page | None = None

    def attach(self, page: Page) -> None:
        """Start listening to the page's response events."""
        if self._page is not None:
            raise RuntimeError("ManifestInterceptor is already attached")
        self._page = page
        page.on("response", self._on_response)

    def detach(self) -> None:
        """Stop listening for responses."""
        if self._page is not None:
            self._page.remove_listener("response", self._on_response)
            self._page = None

    def _on_response(self, response: Response) -> None:
        manifest_format = classify_manifest(
            response.url, response.headers.get("content-type")
        )
        if manifest_format is None:
            return
        task = asyncio.ensure_future(self._capture(response, manifest_format))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _capture(
        self, response: Response, manifest_format: ManifestFormat
    ) -> None:
        try:
            body = await response.text()
        except PlaywrightError as e:
            # Redirect responses have no body
            logger.debug("Skipping unreadable manifest %s: %s", response.url, e)
            return
        logger.debug("Intercepted %s manifest %s", manifest_format.value, response.url)
        self._records.append(
            InterceptedManifest(
                url=response.url, body=body, manifest_format=manifest_format
            )
        )

    async def drain(self) -> None:
        """Wait for in-flight manifest body reads to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    @property
    def records(self) -> list[InterceptedManifest]:
        """Manifests captured so far, in response order."""
        return list(self._records)
