"""URL input plan: open a page and paste a URL into its input field.

This is the plan run by the server and the CLI. It checks the page is
reachable, inspects its structure, then tries a list of candidate selectors
for the URL input field.
"""

import logging
from typing import Optional, Sequence

from ..browser.base import BasePage, ElementNotFoundError, NavigationError
from ..models.plan_models import TestPlan

logger = logging.getLogger(__name__)

DEFAULT_URL_SELECTORS = (
    'input[type="url"]',
    'input[type="text"]',
    'input[placeholder*="url" i]',
    'input[placeholder*="link" i]',
    "#videoUrl",
    "#url",
    ".url-input",
    '[role="textbox"]',
)

CHECK_AVAILABILITY = "Check website availability"
ANALYZE_STRUCTURE = "Analyze page structure"
FILL_URL_INPUT = "Attempt to interact with URL input"


def build_url_input_plan(
    target_url: str,
    input_value: str,
    selectors: Sequence[str] = DEFAULT_URL_SELECTORS,
    timeout_ms: int = 10000,
    name: Optional[str] = None,
) -> TestPlan:
    """
    Build the URL input plan.

    Args:
        target_url: Page under test
        input_value: URL to type into the page's input field
        selectors: Candidate selectors for the input, tried in order
        timeout_ms: Navigation timeout

    Returns:
        Plan with three steps: availability, structure, input
    """

    async def check_availability(page: BasePage) -> None:
        try:
            await page.goto(target_url, wait_until="domcontentloaded", timeout_ms=timeout_ms)
        except NavigationError as e:
            raise NavigationError(f"Website is not accessible: {e}") from e
        logger.info(f"Website {target_url} loaded successfully")

    async def analyze_structure(page: BasePage) -> None:
        title = await page.title()
        status = await page.reload()
        inputs = await page.describe_inputs()
        visible = [field for field in inputs if field.get("is_visible")]
        logger.info(
            f"Page title: {title!r}, status: {status}, "
            f"inputs: {len(inputs)} ({len(visible)} visible)"
        )
        if not inputs:
            raise ElementNotFoundError("Page has no input fields")

    async def fill_url_input(page: BasePage) -> None:
        try:
            selector = await page.fill_first(selectors, input_value)
        except ElementNotFoundError as e:
            raise ElementNotFoundError(
                f"Could not find suitable input method for URL: {e}"
            ) from e
        logger.info(f"Filled URL input using {selector}")

    plan = TestPlan(name=name or f"URL input test - {target_url}", target_url=target_url)
    plan.add_step(CHECK_AVAILABILITY, check_availability, "Navigate and wait for DOM content")
    plan.add_step(ANALYZE_STRUCTURE, analyze_structure, "Read title, reload, list inputs")
    plan.add_step(FILL_URL_INPUT, fill_url_input, "Fill the first matching URL input")
    return plan
