"""Analysis entry points.

analyze_page() works against any PageState; analyze_snapshot() and
analyze_url() (in sce.analysis.live) build the page for you.
"""

from sce.analysis.exceptions import AnalysisError, BrowserUnavailableError, NavigationError
from sce.analysis.orchestrator import analyze_page, analyze_snapshot

__all__ = [
    "AnalysisError",
    "BrowserUnavailableError",
    "NavigationError",
    "analyze_page",
    "analyze_snapshot",
]
