"""Live page analysis with Playwright.

StreamingAnalyzer wires manifest interception to a Playwright page and
runs the analysis once the page has loaded. analyze_url() owns the whole
browser lifecycle for a single URL.
"""

import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from sce.analysis.exceptions import AnalysisError, BrowserUnavailableError, NavigationError
from sce.analysis.orchestrator import analyze_page
from sce.config.models import BrowserConfig
from sce.domain import StreamingAnalysisResult
from sce.logging import analysis_context
from sce.manifest import parse_manifests
from sce.page.playwright import ManifestInterceptor, PlaywrightPage

logger = logging.getLogger(__name__)


class StreamingAnalyzer:
    """Analyze a Playwright page, including manifests fetched while it loads.

    Example:
        analyzer = StreamingAnalyzer(page)
        analyzer.setup_interception()  # before page.goto()
        await page.goto(url)
        result = await analyzer.analyze()
    """

    def __init__(self, page: Page, interceptor: ManifestInterceptor | None = None) -> None:
        self._page = page
        self._interceptor = interceptor or ManifestInterceptor()

    @property
    def interceptor(self) -> ManifestInterceptor:
        return self._interceptor

    def setup_interception(self) -> None:
        """Start capturing manifest responses. Call before navigation."""
        self._interceptor.attach(self._page)

    async def analyze(self) -> StreamingAnalysisResult:
        """Parse captured manifests and analyze the current page state."""
        await self._interceptor.drain()
        manifests = parse_manifests(self._interceptor.records)
        return await analyze_page(PlaywrightPage(self._page), manifests)


async def analyze_url(
    url: str, config: BrowserConfig | None = None
) -> StreamingAnalysisResult:
    """Load url in headless Chromium and analyze it.

    Args:
        url: Page to analyze.
        config: Browser settings; defaults apply when None.

    Returns:
        StreamingAnalysisResult for the page.

    Raises:
        BrowserUnavailableError: If Chromium cannot be launched.
        NavigationError: If the page cannot be loaded.
        AnalysisError: If the page fails during analysis.
    """
    config = config or BrowserConfig()

    with analysis_context(url):
        async with async_playwright() as pw:
            try:
                browser = await pw.chromium.launch(headless=config.headless)
            except PlaywrightError as e:
                raise BrowserUnavailableError(
                    f"Cannot launch Chromium (run 'playwright install chromium'): {e}"
                ) from e

            try:
                try:
                    context = await browser.new_context(user_agent=config.user_agent)
                    page = await context.new_page()
                except PlaywrightError as e:
                    raise AnalysisError(f"Cannot open a browser page: {e}") from e
                analyzer = StreamingAnalyzer(page)
                analyzer.setup_interception()

                logger.info("Loading %s", url)
                try:
                    await page.goto(
                        url,
                        wait_until="domcontentloaded",
                        timeout=config.navigation_timeout_ms,
                    )
                except PlaywrightError as e:
                    raise NavigationError(f"Cannot load {url}: {e}") from e

                if config.settle_ms:
                    try:
                        await page.wait_for_timeout(config.settle_ms)
                    except PlaywrightError as e:
                        raise AnalysisError(
                            f"Page closed while waiting for {url} to settle: {e}"
                        ) from e
                return await analyzer.analyze()
            finally:
                await browser.close()
