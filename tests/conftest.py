"""Shared fixtures for the test suite."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from ai_web_tester.browser.base import BasePage
from ai_web_tester.config.settings import AppSettings
from ai_web_tester.llm.analyzer import ErrorAnalyzer
from ai_web_tester.models.plan_models import TestPlan


class FakeClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 10, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


class RecordingAnalyzer(ErrorAnalyzer):
    """Analyzer that returns a canned analysis and records its inputs."""

    def __init__(self, content: str = "Check the selector"):
        self.content = content
        self.errors = []

    async def analyze(self, error):
        self.errors.append(error)
        return self.content


class FailingAnalyzer(ErrorAnalyzer):
    """Analyzer that always raises."""

    def __init__(self, message: str = "model offline"):
        self.message = message
        self.calls = 0

    async def analyze(self, error):
        self.calls += 1
        raise RuntimeError(self.message)


@pytest.fixture
def clock():
    """Create a deterministic clock."""
    return FakeClock()


@pytest.fixture
def analyzer():
    """Create a recording analyzer."""
    return RecordingAnalyzer()


@pytest.fixture
def mock_page():
    """Create a mock page capability whose screenshots succeed."""
    page = AsyncMock(spec=BasePage)
    page.screenshot = AsyncMock(side_effect=lambda label: f"screenshots/{label}.png")
    return page


def make_plan(*outcomes):
    """Build a plan from (name, exception-or-None) pairs."""
    plan = TestPlan(name="sample plan", target_url="https://example.com")
    for name, error in outcomes:

        async def action(page, error=error):
            if error is not None:
                raise error

        plan.add_step(name, action)
    return plan


@pytest.fixture
def settings(tmp_path):
    """Create settings that write into a temporary directory."""
    return AppSettings(
        openai_api_key=None,
        target_url="https://example.com/",
        input_value="https://www.youtube.com/watch?v=abc",
        screenshots_dir=tmp_path / "screenshots",
        report_path=tmp_path / "report.html",
        report_timezone="UTC",
        max_retained_results=3,
    )
