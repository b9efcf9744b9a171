"""Command line entry point.

Usage:
    ai-web-tester run                       # Run the configured plan once
    ai-web-tester run --url https://...     # Run against another page
    ai-web-tester serve --port 3001         # Start the HTTP server
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from .config.settings import AppSettings, get_settings
from .models.run_models import RunResult, RunStatus
from .reporting.json_reporter import JsonReporter

logger = logging.getLogger(__name__)
console = Console()


def configure_logging(verbose: bool) -> None:
    """Configure process-wide logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not verbose:
        for noisy in ("httpx", "httpcore", "openai"):
            logging.getLogger(noisy).setLevel(logging.WARNING)


def render_result(result: RunResult) -> None:
    """Print a run result as tables."""
    state = result.state
    status = result.status.value if result.status else "unknown"
    colour = "green" if result.status == RunStatus.SUCCESS else "red"
    console.print(f"[bold]{result.plan_name}[/bold]  [{colour}]{status.upper()}[/{colour}]")

    steps = Table(title="Steps")
    steps.add_column("Step")
    steps.add_column("Status")
    steps.add_column("Time")
    for record in state.history:
        steps.add_row(record.step, record.status.value, record.timestamp.strftime("%H:%M:%S"))
    console.print(steps)

    for error in state.artifacts.errors:
        console.print(f"[red]Error in {error.step}:[/red] {error.error}")
    for analysis in state.artifacts.analysis:
        console.print(f"[cyan]Analysis ({analysis.step}):[/cyan] {analysis.content}")
    if result.summary:
        console.print(f"[bold]Summary:[/bold] {result.summary}")
    if result.report_path:
        console.print(f"Report written to {result.report_path}")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """AI Web Tester - browser tests with AI failure analysis."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = get_settings()


@main.command()
@click.option("--url", help="Page under test (overrides TARGET_URL)")
@click.option("--value", help="Value typed into the URL input (overrides INPUT_VALUE)")
@click.option("--report", "report_path", type=click.Path(), help="HTML report path")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def run(
    ctx: click.Context,
    url: Optional[str],
    value: Optional[str],
    report_path: Optional[str],
    headed: bool,
    as_json: bool,
) -> None:
    """Run the URL input plan once and write the report."""
    from .services.test_run_service import TestRunService

    settings: AppSettings = ctx.obj["settings"]
    overrides = {}
    if url:
        overrides["target_url"] = url
    if value:
        overrides["input_value"] = value
    if report_path:
        overrides["report_path"] = Path(report_path)
    if headed:
        overrides["headless"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)

    async def _run() -> RunResult:
        service = TestRunService(settings)
        try:
            return await service.run()
        finally:
            await service.close()

    try:
        result = asyncio.run(_run())
    except Exception as e:
        logger.debug("Run failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    if as_json:
        click.echo(JsonReporter().generate_report(result))
    else:
        render_result(result)
    sys.exit(0 if result.status == RunStatus.SUCCESS else 1)


@main.command()
@click.option("--host", help="Bind address (overrides HOST)")
@click.option("--port", type=int, help="Bind port (overrides PORT)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Start the HTTP server."""
    import uvicorn

    from .api.app import create_app

    settings: AppSettings = ctx.obj["settings"]
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
    )


if __name__ == "__main__":
    main()
