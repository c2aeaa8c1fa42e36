"""Page-state collaborators.

The checks read DOM state through the PageState protocol. Two
implementations ship: PlaywrightPage for live pages (with
ManifestInterceptor as the manifest feed) and StaticPage for saved HTML.
"""

from sce.page.interface import (
    ElementRef,
    ElementSnapshot,
    PageClosedError,
    PageState,
    PageStateError,
    ScriptEvaluationError,
)
from sce.page.static import StaticPage

__all__ = [
    # Protocol
    "ElementRef",
    "ElementSnapshot",
    "PageState",
    # Errors
    "PageClosedError",
    "PageStateError",
    "ScriptEvaluationError",
    # Implementations
    "StaticPage",
]
