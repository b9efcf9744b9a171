"""Page capability interface.

This module defines the narrow interface the orchestrator and test plans use
to drive a browser page, along with the errors it raises.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence


class BasePage(ABC):
    """Abstract page capability.

    Implementations wrap a real browser page; tests use mocks. Every method
    raises a PageError subclass on failure.
    """

    @abstractmethod
    async def goto(
        self,
        url: str,
        wait_until: str = "domcontentloaded",
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Navigate to a URL and wait until it is ready.

        Args:
            url: Target URL
            wait_until: Wait condition (load, domcontentloaded, networkidle)
            timeout_ms: Navigation timeout in milliseconds

        Raises:
            NavigationError: If navigation fails or times out
        """
        pass

    @abstractmethod
    async def reload(self, wait_until: str = "domcontentloaded") -> Optional[int]:
        """Reload the current page.

        Returns:
            HTTP status of the reloaded document, if known

        Raises:
            NavigationError: If the reload fails
        """
        pass

    @abstractmethod
    async def title(self) -> str:
        """Return the document title."""
        pass

    @abstractmethod
    async def describe_inputs(self) -> List[Dict[str, Any]]:
        """Describe the page's input fields (type, id, name, placeholder, visibility)."""
        pass

    @abstractmethod
    async def fill_first(self, selectors: Sequence[str], value: str) -> str:
        """Fill the first input matching one of the candidate selectors.

        Candidates are tried in order; the first element that accepts the
        value wins.

        Args:
            selectors: Candidate selectors, most specific first
            value: Value to type into the input

        Returns:
            The selector that was used

        Raises:
            ElementNotFoundError: If no candidate matches an element
            InteractionError: If matching elements all refused the value
        """
        pass

    @abstractmethod
    async def screenshot(self, label: str) -> str:
        """Capture a full-page screenshot.

        Args:
            label: Short label used in the file name

        Returns:
            Path of the written screenshot

        Raises:
            InteractionError: If the screenshot cannot be taken
        """
        pass


class PageError(Exception):
    """Base class for page capability failures."""

    pass


class NavigationError(PageError):
    """Raised when navigation fails or times out."""

    pass


class ElementNotFoundError(PageError):
    """Raised when no candidate selector matches an element."""

    pass


class InteractionError(PageError):
    """Raised when an element or the page refuses an interaction."""

    pass


class BrowserSetupError(RuntimeError):
    """Raised when the browser, context or page cannot be created."""

    pass
