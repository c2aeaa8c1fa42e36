"""Exceptions raised by the analysis entry points."""


class AnalysisError(Exception):
    """Raised when an analysis cannot complete."""


class NavigationError(AnalysisError):
    """Raised when the target page cannot be loaded."""


class BrowserUnavailableError(AnalysisError):
    """Raised when no browser can be launched for live analysis."""
