"""Playwright implementation of the page capability."""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from playwright.async_api import Error as PlaywrightError, Page

from .base import (
    BasePage,
    ElementNotFoundError,
    InteractionError,
    NavigationError,
)

logger = logging.getLogger(__name__)

_DESCRIBE_INPUTS_JS = """
inputs => inputs.map(input => ({
    type: input.type,
    id: input.id,
    name: input.name,
    placeholder: input.placeholder,
    is_visible: input.offsetParent !== null
}))
"""


def screenshot_filename(label: str, now: Optional[datetime] = None) -> str:
    """Build a timestamped screenshot file name such as ``load-2024-01-01T10-00-00-000000.png``."""
    slug = re.sub(r"[^A-Za-z0-9]+", "-", label).strip("-").lower() or "screenshot"
    timestamp = (now or datetime.now()).isoformat().replace(":", "-").replace(".", "-")
    return f"{slug}-{timestamp}.png"


class PlaywrightPage(BasePage):
    """Page capability backed by a Playwright page.

    Screenshots are written to ``screenshots_dir`` with timestamped file
    names; the returned path is what ends up in the run state.
    """

    def __init__(
        self,
        page: Page,
        screenshots_dir: Path,
        default_timeout_ms: int = 10000,
        full_page: bool = True,
    ):
        """
        Args:
            page: Playwright page to drive
            screenshots_dir: Directory screenshots are written to
            default_timeout_ms: Navigation timeout when none is given
            full_page: Capture the full scrollable page
        """
        self.page = page
        self.screenshots_dir = Path(screenshots_dir)
        self.default_timeout_ms = default_timeout_ms
        self.full_page = full_page

    async def goto(
        self,
        url: str,
        wait_until: str = "domcontentloaded",
        timeout_ms: Optional[int] = None,
    ) -> None:
        timeout = timeout_ms if timeout_ms is not None else self.default_timeout_ms
        try:
            await self.page.goto(url, wait_until=wait_until, timeout=timeout)
            logger.debug(f"Navigated to {url}")
        except Exception as e:
            logger.error(f"Navigation to {url} failed: {e}")
            raise NavigationError(f"Navigation to {url} failed: {e}")

    async def reload(self, wait_until: str = "domcontentloaded") -> Optional[int]:
        try:
            response = await self.page.reload(wait_until=wait_until)
        except Exception as e:
            logger.error(f"Reload failed: {e}")
            raise NavigationError(f"Reload failed: {e}")
        return response.status if response is not None else None

    async def title(self) -> str:
        return await self.page.title()

    async def describe_inputs(self) -> List[Dict[str, Any]]:
        try:
            return await self.page.eval_on_selector_all("input", _DESCRIBE_INPUTS_JS)
        except PlaywrightError as e:
            raise InteractionError(f"Could not inspect input fields: {e}")

    async def fill_first(self, selectors: Sequence[str], value: str) -> str:
        matched = []
        for selector in selectors:
            element = await self.page.query_selector(selector)
            if element is None:
                continue

            matched.append(selector)
            try:
                await element.fill(value)
                logger.info(f"Successfully used selector: {selector}")
                return selector
            except PlaywrightError as e:
                logger.debug(f"Failed with selector {selector}: {e}")

        if not matched:
            raise ElementNotFoundError(
                f"No element matched any of {len(selectors)} candidate selectors"
            )
        raise InteractionError(
            f"Matched elements refused input: {', '.join(matched)}"
        )

    async def screenshot(self, label: str) -> str:
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        path = self.screenshots_dir / screenshot_filename(label)
        try:
            await self.page.screenshot(path=str(path), full_page=self.full_page)
        except Exception as e:
            logger.error(f"Screenshot capture failed: {e}")
            raise InteractionError(f"Screenshot failed: {e}")
        logger.debug(f"Captured screenshot to {path}")
        return str(path)
