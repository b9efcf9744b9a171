"""Tests for HTML report generation."""

from datetime import datetime, timedelta, timezone

import pytest

from ai_web_tester.models.run_models import (
    AnalysisRecord,
    ErrorRecord,
    RunResult,
    RunState,
    RunStatus,
    ScreenshotRecord,
    StepRecord,
    StepStatus,
)
from ai_web_tester.reporting.html_reporter import FAILURE_RECOMMENDATIONS, HtmlReporter

START = datetime(2024, 1, 1, 10, 0, 0)


def make_result(status, history=(), errors=(), analysis=(), screenshots=(), summary=None):
    """Build a run result with the given records."""
    state = RunState()
    state.metadata.start_time = START
    state.metadata.end_time = START + timedelta(seconds=12)
    state.metadata.status = status
    state.history = list(history)
    state.artifacts.errors = list(errors)
    state.artifacts.analysis = list(analysis)
    state.artifacts.screenshots = list(screenshots)
    return RunResult(
        run_id="run-1",
        plan_name="URL input test",
        target_url="https://example.com/",
        state=state,
        summary=summary,
    )


@pytest.fixture
def reporter():
    """Create an HTML reporter."""
    return HtmlReporter(timezone="UTC")


@pytest.fixture
def success_result():
    """Create a passing run."""
    return make_result(
        RunStatus.SUCCESS,
        history=[
            StepRecord(step="Load", status=StepStatus.RUNNING),
            StepRecord(step="Load", status=StepStatus.SUCCESS),
        ],
        screenshots=[ScreenshotRecord(path="/tmp/shots/load-2024.png", step="Load")],
    )


@pytest.fixture
def failed_result():
    """Create a failing run with an error and its analysis."""
    return make_result(
        RunStatus.FAILED,
        history=[
            StepRecord(step="Load", status=StepStatus.RUNNING),
            StepRecord(step="Load", status=StepStatus.SUCCESS),
            StepRecord(step="Fill", status=StepStatus.RUNNING),
            StepRecord(step="Fill", status=StepStatus.FAILED),
        ],
        errors=[ErrorRecord(error="<b>No input</b> found", step="Fill")],
        analysis=[AnalysisRecord(content="The page blocks bots", step="Fill")],
        summary="The input step failed.",
    )


class TestHtmlReporter:
    """Tests for HtmlReporter."""

    def test_success_report(self, reporter, success_result):
        """Test a passing report shows steps and screenshots without recommendations."""
        html = reporter.generate_report(
            success_result, generated_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        )

        assert html.startswith("<!DOCTYPE html>")
        assert '<div class="status success">success</div>' in html
        assert "✅ Load" in html
        assert "January 01, 2024 12:00:00 UTC" in html
        assert "12 seconds" in html
        assert 'src="/screenshots/load-2024.png"' in html
        assert "Recommendations" not in html
        assert "AI Analysis" not in html

    def test_failed_report(self, reporter, failed_result):
        """Test a failing report shows the error, analysis and recommendations."""
        html = reporter.generate_report(failed_result)

        assert '<div class="status failed">failed</div>' in html
        assert "❌ Fill" in html
        assert "AI Analysis" in html
        assert "The input step failed." in html
        assert "The page blocks bots" in html
        assert "Recommendations" in html
        for item in FAILURE_RECOMMENDATIONS:
            assert item in html

    def test_values_are_escaped(self, reporter, failed_result):
        """Test error text cannot inject markup."""
        html = reporter.generate_report(failed_result)

        assert "<b>No input</b>" not in html
        assert "&lt;b&gt;No input&lt;/b&gt; found" in html

    def test_timezone(self, failed_result):
        """Test the generated timestamp is shown in the configured timezone."""
        reporter = HtmlReporter(timezone="Asia/Jakarta")

        html = reporter.generate_report(
            failed_result, generated_at=datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
        )

        assert "January 01, 2024 07:00:00 WIB" in html

    def test_empty_run(self, reporter):
        """Test a run without steps still renders."""
        html = reporter.generate_report(make_result(RunStatus.SUCCESS))

        assert "No steps were run." in html
        assert "Screenshots" not in html

    def test_write_report(self, reporter, success_result, tmp_path):
        """Test the report is written to disk, creating parent directories."""
        path = reporter.write_report(success_result, tmp_path / "out" / "report.html")

        assert path.exists()
        assert "Website Testing Report" in path.read_text(encoding="utf-8")
