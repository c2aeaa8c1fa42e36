"""PageState interface for reading DOM state from a rendered page.

The compliance checks never talk to a browser directly. They go through
this protocol, which a live Playwright page or a saved HTML snapshot can
implement. Element references are opaque handles owned by the
implementation and are only ever passed back to the same PageState.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias

ElementRef: TypeAlias = Any


class PageStateError(Exception):
    """Base error raised by PageState implementations."""


class ScriptEvaluationError(PageStateError):
    """Raised when a single expression or query fails against the page.

    Recoverable: callers treat the probe or heuristic that triggered it as
    "not detected" and continue with the rest of the analysis.
    """


class PageClosedError(PageStateError):
    """Raised when the page itself is gone (closed tab, crashed browser).

    Not recoverable: no further check can run, so this propagates to the
    caller of the analysis.
    """


@dataclass(frozen=True)
class ElementSnapshot:
    """Point-in-time view of one element's DOM state."""

    tag_name: str
    id: str | None = None
    classes: tuple[str, ...] = ()
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    tab_index: int = -1
    # False when the element has no offsetParent
    rendered: bool = True
    src: str | None = None
    # 1-based position among same-tag siblings, and how many there are
    type_index: int = 1
    type_count: int = 1

    def attr(self, name: str) -> str | None:
        """Return an attribute value, or None if absent."""
        return self.attributes.get(name)


class PageState(Protocol):
    """Protocol for page-state collaborators.

    All methods are coroutines and may fail independently. Implementations
    raise ScriptEvaluationError for failures scoped to one call and
    PageClosedError when the page can no longer be reached.
    """

    async def evaluate(self, expression: str) -> Any:
        """Evaluate a script expression against global page state.

        Args:
            expression: JavaScript expression or function source.

        Returns:
            The JSON-serializable result of the expression.

        Raises:
            ScriptEvaluationError: If the expression throws.
            PageClosedError: If the page is gone.
        """
        ...

    async def query_all(
        self, selector: str, scope: ElementRef | None = None
    ) -> list[ElementRef]:
        """Return elements matching selector in document order.

        Args:
            selector: CSS selector.
            scope: Restrict matching to descendants of this element.

        Raises:
            ScriptEvaluationError: If the selector is invalid.
        """
        ...

    async def query_one(
        self, selector: str, scope: ElementRef | None = None
    ) -> ElementRef | None:
        """Return the first element matching selector, or None."""
        ...

    async def snapshot(self, element: ElementRef) -> ElementSnapshot:
        """Read tag, attributes, text, tab index and render state."""
        ...

    async def parent(self, element: ElementRef) -> ElementRef | None:
        """Return the parent element, or None above the root element."""
        ...

    async def computed_style(
        self, element: ElementRef, properties: list[str]
    ) -> dict[str, str]:
        """Read computed CSS values for the given (kebab-case) properties."""
        ...

    async def focus(self, element: ElementRef) -> None:
        """Move keyboard focus to element."""
        ...

    async def blur(self, element: ElementRef) -> None:
        """Remove keyboard focus from element."""
        ...
