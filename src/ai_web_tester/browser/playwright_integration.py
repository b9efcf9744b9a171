"""Playwright browser lifecycle management.

This module provides the PlaywrightManager class which owns the Playwright
driver, the browser and the isolated contexts/pages created for test runs.

CRITICAL: Proper cleanup is essential to avoid resource leaks.
"""

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)
from typing import Optional, Dict, Any
import logging

from .base import BrowserSetupError

logger = logging.getLogger(__name__)


class PlaywrightManager:
    """Manage the Playwright driver, browser and per-run contexts.

    PATTERN: One browser per manager, one isolated context per test run.

    CRITICAL: Always call cleanup() or use as async context manager to ensure
    proper resource cleanup.
    """

    def __init__(self, browser_type: str = "chromium", headless: bool = True):
        """Initialize the Playwright manager.

        Args:
            browser_type: Playwright browser engine (chromium, firefox, webkit)
            headless: Whether to run in headless mode
        """
        self.browser_type = browser_type
        self.headless = headless
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.contexts: Dict[str, BrowserContext] = {}
        self._initialized = False

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.cleanup()

    async def initialize(self) -> None:
        """Start the Playwright driver.

        Raises:
            BrowserSetupError: If initialization fails
        """
        if self._initialized:
            return

        try:
            self.playwright = await async_playwright().start()
            self._initialized = True
            logger.info("Playwright initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Playwright: {e}")
            raise BrowserSetupError(f"Playwright initialization failed: {e}")

    async def launch_browser(self, **options: Any) -> Browser:
        """Launch the browser, reusing it if already running.

        Args:
            **options: Additional browser launch options

        Returns:
            Browser instance

        Raises:
            BrowserSetupError: If the browser fails to launch
        """
        if not self._initialized:
            await self.initialize()

        if self.browser is not None:
            logger.debug(f"Reusing existing {self.browser_type} browser")
            return self.browser

        try:
            launcher = getattr(self.playwright, self.browser_type)
            self.browser = await launcher.launch(headless=self.headless, **options)
            logger.info(f"Launched {self.browser_type} browser (headless={self.headless})")
            return self.browser
        except Exception as e:
            logger.error(f"Failed to launch {self.browser_type} browser: {e}")
            raise BrowserSetupError(f"Browser launch failed: {e}")

    async def new_page(self, **context_options: Any) -> Page:
        """Create a page in a fresh isolated context.

        Args:
            **context_options: Options passed to ``browser.new_context``

        Returns:
            Page instance

        Raises:
            BrowserSetupError: If context or page creation fails
        """
        browser = await self.launch_browser()
        try:
            context = await browser.new_context(**context_options)
        except Exception as e:
            logger.error(f"Failed to create context: {e}")
            raise BrowserSetupError(f"Context creation failed: {e}")

        context_id = f"context_{id(context)}"
        self.contexts[context_id] = context
        try:
            page = await context.new_page()
        except Exception as e:
            logger.error(f"Failed to create page: {e}")
            self.contexts.pop(context_id, None)
            try:
                await context.close()
            except Exception as close_error:
                logger.warning(f"Failed to close context {context_id}: {close_error}")
            raise BrowserSetupError(f"Page creation failed: {e}")

        logger.debug(f"Created page in {context_id}")
        return page

    async def close_context(self, page: Page) -> None:
        """Close the context owning a page."""
        context = page.context
        context_id = f"context_{id(context)}"
        try:
            await context.close()
            logger.debug(f"Closed context: {context_id}")
        finally:
            self.contexts.pop(context_id, None)

    async def cleanup(self) -> None:
        """Close all contexts, the browser and the driver.

        CRITICAL: Must be called to prevent resource leaks.

        Raises:
            RuntimeError: If any resource failed to close
        """
        errors = []

        for context_id, context in list(self.contexts.items()):
            try:
                await context.close()
                logger.debug(f"Closed context: {context_id}")
            except Exception as e:
                errors.append(f"Failed to close context {context_id}: {e}")
        self.contexts.clear()

        if self.browser is not None:
            try:
                await self.browser.close()
                logger.debug(f"Closed browser: {self.browser_type}")
            except Exception as e:
                errors.append(f"Failed to close browser {self.browser_type}: {e}")
            self.browser = None

        if self.playwright is not None:
            try:
                await self.playwright.stop()
                logger.info("Playwright stopped successfully")
            except Exception as e:
                errors.append(f"Failed to stop Playwright: {e}")
            self.playwright = None

        self._initialized = False

        if errors:
            error_msg = "; ".join(errors)
            logger.warning(f"Cleanup completed with errors: {error_msg}")
            raise RuntimeError(f"Cleanup errors: {error_msg}")
        logger.info("Cleanup completed successfully")
