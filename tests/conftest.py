"""Shared test fixtures for the Streaming Compliance Engine."""

from collections.abc import Callable
from pathlib import Path

import pytest

from sce.domain import ManifestFormat
from sce.manifest import InterceptedManifest
from sce.page import PageClosedError, PageStateError, ScriptEvaluationError, StaticPage

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FailingPage:
    """PageState whose every call raises the given error."""

    def __init__(self, error: PageStateError) -> None:
        self.error = error
        self.calls: list[str] = []

    def _fail(self, method: str):
        self.calls.append(method)
        raise self.error

    async def evaluate(self, expression):
        self._fail("evaluate")

    async def query_all(self, selector, scope=None):
        self._fail("query_all")

    async def query_one(self, selector, scope=None):
        self._fail("query_one")

    async def snapshot(self, element):
        self._fail("snapshot")

    async def parent(self, element):
        self._fail("parent")

    async def computed_style(self, element, properties):
        self._fail("computed_style")

    async def focus(self, element):
        self._fail("focus")

    async def blur(self, element):
        self._fail("blur")


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def manifest_fixtures_dir() -> Path:
    """Return the path to the manifest fixtures directory."""
    return FIXTURES_DIR / "manifests"


@pytest.fixture
def page_fixtures_dir() -> Path:
    """Return the path to the HTML page fixtures directory."""
    return FIXTURES_DIR / "pages"


@pytest.fixture
def hls_master_text(manifest_fixtures_dir: Path) -> str:
    """Return the HLS master playlist fixture."""
    return (manifest_fixtures_dir / "master.m3u8").read_text()


@pytest.fixture
def dash_mpd_text(manifest_fixtures_dir: Path) -> str:
    """Return the DASH MPD fixture."""
    return (manifest_fixtures_dir / "manifest.mpd").read_text()


@pytest.fixture
def intercepted_manifests(
    hls_master_text: str, dash_mpd_text: str
) -> list[InterceptedManifest]:
    """Return the HLS and DASH fixtures as intercepted responses."""
    return [
        InterceptedManifest(
            url="https://cdn.example.com/vod/master.m3u8",
            body=hls_master_text,
            manifest_format=ManifestFormat.HLS,
        ),
        InterceptedManifest(
            url="https://cdn.example.com/vod/manifest.mpd",
            body=dash_mpd_text,
            manifest_format=ManifestFormat.DASH,
        ),
    ]


@pytest.fixture
def load_page(page_fixtures_dir: Path) -> Callable[[str], StaticPage]:
    """Return a loader that parses an HTML fixture into a StaticPage."""

    def _load(name: str) -> StaticPage:
        return StaticPage.from_html((page_fixtures_dir / name).read_text())

    return _load


@pytest.fixture
def closed_page() -> FailingPage:
    """Return a page that behaves as if the browser went away."""
    return FailingPage(PageClosedError("Target page has been closed"))


@pytest.fixture
def broken_page() -> FailingPage:
    """Return a page on which every expression and query fails."""
    return FailingPage(ScriptEvaluationError("boom"))
