"""Tests for PlaywrightManager.

These tests cover the driver lifecycle, browser reuse, per-run context
creation and resource cleanup, with Playwright fully mocked.
"""

import pytest
from unittest.mock import AsyncMock, Mock, patch
from playwright.async_api import Browser, BrowserContext, Page

from ai_web_tester.browser.base import BrowserSetupError
from ai_web_tester.browser.playwright_integration import PlaywrightManager


@pytest.fixture
def manager():
    """Create a PlaywrightManager instance for testing."""
    return PlaywrightManager()


@pytest.fixture
def mock_page():
    """Create a mock Page instance."""
    return AsyncMock(spec=Page)


@pytest.fixture
def mock_context(mock_page):
    """Create a mock BrowserContext instance."""
    context = AsyncMock(spec=BrowserContext)
    context.new_page = AsyncMock(return_value=mock_page)
    context.close = AsyncMock()
    mock_page.context = context
    return context


@pytest.fixture
def mock_browser(mock_context):
    """Create a mock Browser instance."""
    browser = AsyncMock(spec=Browser)
    browser.new_context = AsyncMock(return_value=mock_context)
    browser.close = AsyncMock()
    return browser


@pytest.fixture
def mock_playwright(mock_browser):
    """Create a mock Playwright instance."""
    playwright = Mock()
    playwright.chromium.launch = AsyncMock(return_value=mock_browser)
    playwright.firefox.launch = AsyncMock(return_value=mock_browser)
    playwright.stop = AsyncMock()
    return playwright


@pytest.fixture
def patched_playwright(mock_playwright):
    """Patch async_playwright to start the mock driver."""
    with patch("ai_web_tester.browser.playwright_integration.async_playwright") as mock_async_pw:
        mock_async_pw.return_value.start = AsyncMock(return_value=mock_playwright)
        yield mock_async_pw


class TestInitialization:
    """Tests for driver startup."""

    def test_init(self):
        """Test PlaywrightManager initialization."""
        manager = PlaywrightManager(browser_type="firefox", headless=False)

        assert manager.browser_type == "firefox"
        assert manager.headless is False
        assert manager.playwright is None
        assert manager.browser is None
        assert manager.contexts == {}
        assert manager._initialized is False

    @pytest.mark.asyncio
    async def test_initialize_success(self, manager, patched_playwright, mock_playwright):
        """Test successful Playwright initialization."""
        await manager.initialize()

        assert manager.playwright is mock_playwright
        assert manager._initialized is True

    @pytest.mark.asyncio
    async def test_initialize_twice(self, manager, patched_playwright):
        """Test initialization is idempotent."""
        await manager.initialize()
        await manager.initialize()

        patched_playwright.return_value.start.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_initialize_failure(self, manager):
        """Test initialization failures raise BrowserSetupError."""
        with patch("ai_web_tester.browser.playwright_integration.async_playwright") as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(side_effect=Exception("no driver"))

            with pytest.raises(BrowserSetupError, match="no driver"):
                await manager.initialize()

        assert manager._initialized is False


class TestBrowserLaunch:
    """Tests for launching browsers."""

    @pytest.mark.asyncio
    async def test_launch_browser(self, manager, patched_playwright, mock_playwright, mock_browser):
        """Test the configured engine is launched with the headless flag."""
        browser = await manager.launch_browser()

        assert browser is mock_browser
        mock_playwright.chromium.launch.assert_awaited_once_with(headless=True)

    @pytest.mark.asyncio
    async def test_launch_browser_reused(self, manager, patched_playwright, mock_playwright):
        """Test a running browser is reused."""
        first = await manager.launch_browser()
        second = await manager.launch_browser()

        assert first is second
        mock_playwright.chromium.launch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_launch_other_engine(self, patched_playwright, mock_playwright):
        """Test the browser type selects the launcher."""
        manager = PlaywrightManager(browser_type="firefox", headless=False)

        await manager.launch_browser()

        mock_playwright.firefox.launch.assert_awaited_once_with(headless=False)

    @pytest.mark.asyncio
    async def test_launch_failure(self, manager, patched_playwright, mock_playwright):
        """Test launch failures raise BrowserSetupError."""
        mock_playwright.chromium.launch.side_effect = Exception("missing executable")

        with pytest.raises(BrowserSetupError, match="missing executable"):
            await manager.launch_browser()


class TestPages:
    """Tests for per-run pages and contexts."""

    @pytest.mark.asyncio
    async def test_new_page(self, manager, patched_playwright, mock_browser, mock_page):
        """Test a page is created in a new tracked context."""
        page = await manager.new_page(viewport={"width": 1280, "height": 720})

        assert page is mock_page
        mock_browser.new_context.assert_awaited_once_with(
            viewport={"width": 1280, "height": 720}
        )
        assert len(manager.contexts) == 1

    @pytest.mark.asyncio
    async def test_new_page_failure(self, manager, patched_playwright, mock_context):
        """Test page creation failures raise BrowserSetupError."""
        mock_context.new_page.side_effect = Exception("context crashed")

        with pytest.raises(BrowserSetupError, match="context crashed"):
            await manager.new_page()

        mock_context.close.assert_awaited_once()
        assert manager.contexts == {}

    @pytest.mark.asyncio
    async def test_new_page_failure_close_error(self, manager, patched_playwright, mock_context):
        """Test a context that cannot close still leaves the page error raised."""
        mock_context.new_page.side_effect = Exception("context crashed")
        mock_context.close.side_effect = Exception("already gone")

        with pytest.raises(BrowserSetupError, match="context crashed"):
            await manager.new_page()

        assert manager.contexts == {}

    @pytest.mark.asyncio
    async def test_new_context_failure(self, manager, patched_playwright, mock_browser):
        """Test context creation failures raise BrowserSetupError."""
        mock_browser.new_context.side_effect = Exception("browser closed")

        with pytest.raises(BrowserSetupError, match="browser closed"):
            await manager.new_page()

        assert manager.contexts == {}

    @pytest.mark.asyncio
    async def test_close_context(self, manager, patched_playwright, mock_context):
        """Test closing a page's context untracks it."""
        page = await manager.new_page()

        await manager.close_context(page)

        mock_context.close.assert_awaited_once()
        assert manager.contexts == {}


class TestCleanup:
    """Tests for resource cleanup."""

    @pytest.mark.asyncio
    async def test_cleanup(self, manager, patched_playwright, mock_playwright, mock_browser, mock_context):
        """Test cleanup closes contexts, browser and driver."""
        await manager.new_page()

        await manager.cleanup()

        mock_context.close.assert_awaited_once()
        mock_browser.close.assert_awaited_once()
        mock_playwright.stop.assert_awaited_once()
        assert manager.browser is None
        assert manager.playwright is None
        assert manager._initialized is False

    @pytest.mark.asyncio
    async def test_cleanup_collects_errors(self, manager, patched_playwright, mock_playwright, mock_browser):
        """Test cleanup keeps going after a failure and reports it."""
        await manager.launch_browser()
        mock_browser.close.side_effect = Exception("already closed")

        with pytest.raises(RuntimeError, match="already closed"):
            await manager.cleanup()

        mock_playwright.stop.assert_awaited_once()
        assert manager.browser is None

    @pytest.mark.asyncio
    async def test_context_manager(self, patched_playwright, mock_playwright):
        """Test async context manager initializes and cleans up."""
        async with PlaywrightManager() as manager:
            assert manager._initialized is True

        mock_playwright.stop.assert_awaited_once()
