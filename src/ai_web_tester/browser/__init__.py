"""Browser automation layer: the page capability and its Playwright backing."""

from .base import (
    BasePage,
    PageError,
    NavigationError,
    ElementNotFoundError,
    InteractionError,
    BrowserSetupError,
)
from .page import PlaywrightPage, screenshot_filename
from .playwright_integration import PlaywrightManager

__all__ = [
    "BasePage",
    "PageError",
    "NavigationError",
    "ElementNotFoundError",
    "InteractionError",
    "BrowserSetupError",
    "PlaywrightPage",
    "screenshot_filename",
    "PlaywrightManager",
]
