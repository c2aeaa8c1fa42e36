"""Analysis context for structured logging.

Tags every log record emitted during one analysis pass with the page
being analyzed. Uses contextvars so concurrent analyses in one event
loop keep their own tags.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_page_url: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "page_url", default=None
)

# Longest URL shown in the text-format tag
MAX_TAG_URL_LENGTH = 60


def get_analysis_context() -> str | None:
    """Return the URL of the page currently being analyzed, if any."""
    return _page_url.get()


@contextmanager
def analysis_context(page_url: str) -> Generator[None, None, None]:
    """Context manager marking the page an analysis is running against.

    Args:
        page_url: URL (or snapshot path) of the analyzed page.

    Example:
        with analysis_context("https://example.com/watch"):
            logger.info("Detecting players")  # Tagged with the URL
    """
    token = _page_url.set(page_url)
    try:
        yield
    finally:
        _page_url.reset(token)


class AnalysisContextFilter(logging.Filter):
    """Logging filter that injects the analysis context into log records.

    Adds page_url for JSON output and a compact url_tag such as
    "[https://example.com/watch] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject analysis context into the record; never drops records."""
        page_url = _page_url.get()
        record.page_url = page_url
        if page_url:
            if len(page_url) > MAX_TAG_URL_LENGTH:
                page_url = page_url[: MAX_TAG_URL_LENGTH - 3] + "..."
            record.url_tag = f"[{page_url}] "
        else:
            record.url_tag = ""
        return True
