"""HTML report generator for test runs.

Renders an exported run (steps, errors, AI analysis, screenshots) as a single
self-contained HTML page. Screenshots are referenced by file name under the
``/screenshots`` URL prefix served by the HTTP app.
"""

import logging
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from ..models.run_models import RunResult, RunStatus, StepStatus

logger = logging.getLogger(__name__)

FAILURE_RECOMMENDATIONS = (
    "Consider manual testing to verify the exact user interaction flow",
    "Investigate if the website requires specific user interactions before showing the input field",
    "Check if the website has implemented measures to prevent automated access",
)


class HtmlReporter:
    """
    Generate HTML test reports.

    PATTERN: Template-based HTML generation
    GOTCHA: Every value from the run is escaped; error messages and model
        output can contain markup
    """

    def __init__(
        self,
        timezone: str = "UTC",
        screenshots_url: str = "/screenshots",
    ):
        """
        Initialize HTML reporter.

        Args:
            timezone: IANA timezone for the "generated on" timestamp
            screenshots_url: URL prefix screenshots are served from
        """
        self.timezone = ZoneInfo(timezone)
        self.screenshots_url = screenshots_url.rstrip("/")
        self.logger = logger

    def generate_report(self, result: RunResult, generated_at: Optional[datetime] = None) -> str:
        """
        Generate HTML report for a run.

        Args:
            result: Run result to render
            generated_at: Report timestamp (now if omitted)

        Returns:
            HTML string
        """
        self.logger.info(f"Generating HTML report: {result.run_id}")
        generated_at = (generated_at or datetime.now(self.timezone)).astimezone(self.timezone)

        html = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Website Testing Report - {escape(result.target_url or result.plan_name)}</title>
    {self._generate_styles()}
</head>
<body>
    <div class="container">
        {self._generate_header(result, generated_at)}
        {self._generate_info_section(result)}
        {self._generate_steps_section(result)}
        {self._generate_analysis_section(result)}
        {self._generate_screenshots_section(result)}
        {self._generate_recommendations_section(result)}
    </div>
</body>
</html>"""

        self.logger.info(f"HTML report generated ({len(html)} bytes)")
        return html

    def write_report(self, result: RunResult, path: Path) -> Path:
        """Render a report and write it to disk."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.generate_report(result), encoding="utf-8")
        self.logger.info(f"HTML report written to {path}")
        return path

    def _generate_styles(self) -> str:
        """Generate CSS styles."""
        return """<style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, sans-serif;
            line-height: 1.6;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background-color: #f5f5f5;
        }
        .container {
            background-color: white;
            padding: 30px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        .header {
            text-align: center;
            margin-bottom: 30px;
            padding-bottom: 20px;
            border-bottom: 2px solid #eee;
        }
        .status {
            display: inline-block;
            padding: 8px 16px;
            border-radius: 4px;
            font-weight: bold;
            text-transform: uppercase;
            font-size: 14px;
        }
        .status.failed, .status.running, .status.unknown {
            background-color: #ffebee;
            color: #c62828;
        }
        .status.success {
            background-color: #e8f5e9;
            color: #2e7d32;
        }
        .section h2 {
            color: #333;
            border-bottom: 1px solid #eee;
            padding-bottom: 10px;
        }
        .step {
            margin: 10px 0;
            padding: 10px;
            background-color: #f8f9fa;
            border-radius: 4px;
        }
        .step.failed {
            background-color: #fff3f3;
            border-left: 4px solid #dc3545;
        }
        .step.success {
            background-color: #f3fff3;
            border-left: 4px solid #28a745;
        }
        .error {
            background-color: #fff3f3;
            padding: 15px;
            border-radius: 4px;
            margin: 10px 0;
            color: #dc3545;
            font-family: monospace;
        }
        .analysis {
            background-color: #f8f9fa;
            padding: 20px;
            border-radius: 4px;
            margin: 20px 0;
            white-space: pre-wrap;
        }
        .screenshots {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(300px, 1fr));
            gap: 20px;
        }
        .screenshot img {
            width: 100%;
            border: 1px solid #eee;
            border-radius: 4px;
        }
        .timestamp, .screenshot p {
            color: #666;
            font-size: 14px;
        }
    </style>"""

    def _generate_header(self, result: RunResult, generated_at: datetime) -> str:
        status = result.status.value if result.status else "unknown"
        return f"""<div class="header">
            <h1>Website Testing Report</h1>
            <p class="timestamp">Generated on: {generated_at.strftime('%B %d, %Y %H:%M:%S %Z')}</p>
            <div class="status {status}">{status}</div>
        </div>"""

    def _generate_info_section(self, result: RunResult) -> str:
        duration = result.state.duration_seconds
        duration_text = f"{round(duration)} seconds" if duration is not None else "n/a"
        website = (
            f"<p><strong>Website:</strong> {escape(result.target_url)}</p>"
            if result.target_url
            else ""
        )
        return f"""<div class="section">
            <h2>Test Information</h2>
            {website}
            <p><strong>Test Case:</strong> {escape(result.plan_name)}</p>
            <p><strong>Run ID:</strong> {escape(result.run_id)}</p>
            <p><strong>Test Duration:</strong> {duration_text}</p>
        </div>"""

    def _generate_steps_section(self, result: RunResult) -> str:
        state = result.state
        final_status = {}
        for record in state.history:
            final_status[record.step] = record.status

        items = []
        for step in state.step_names:
            status = final_status[step]
            failed = status == StepStatus.FAILED
            symbol = {StepStatus.SUCCESS: "✅", StepStatus.FAILED: "❌"}.get(status, "⏳")
            errors = "".join(
                f'<div class="error">Error: {escape(e.error)}</div>'
                for e in state.artifacts.errors
                if failed and e.step == step
            )
            items.append(
                f'<div class="step {status.value}"><p>{symbol} {escape(step)}</p>{errors}</div>'
            )

        return f"""<div class="section">
            <h2>Test Steps</h2>
            {''.join(items) or '<p>No steps were run.</p>'}
        </div>"""

    def _generate_analysis_section(self, result: RunResult) -> str:
        blocks = []
        if result.summary:
            blocks.append(f'<div class="analysis">{escape(result.summary)}</div>')
        for analysis in result.state.artifacts.analysis:
            heading = f"<h3>{escape(analysis.step)}</h3>" if analysis.step else ""
            blocks.append(f'{heading}<div class="analysis">{escape(analysis.content)}</div>')

        if not blocks:
            return ""
        return f"""<div class="section">
            <h2>AI Analysis</h2>
            {''.join(blocks)}
        </div>"""

    def _generate_screenshots_section(self, result: RunResult) -> str:
        shots = []
        for index, shot in enumerate(result.state.artifacts.screenshots, start=1):
            name = Path(shot.path).name
            caption = escape(shot.step or name)
            shots.append(
                f"""<div class="screenshot">
                    <img src="{self.screenshots_url}/{escape(name)}" alt="Screenshot {index}">
                    <p>Step {index}: {caption}</p>
                </div>"""
            )

        if not shots:
            return ""
        return f"""<div class="section">
            <h2>Screenshots</h2>
            <div class="screenshots">{''.join(shots)}</div>
        </div>"""

    def _generate_recommendations_section(self, result: RunResult) -> str:
        if result.status != RunStatus.FAILED:
            return ""
        items = "".join(f"<li>{item}</li>" for item in FAILURE_RECOMMENDATIONS)
        return f"""<div class="section">
            <h2>Recommendations</h2>
            <ul>{items}</ul>
        </div>"""
