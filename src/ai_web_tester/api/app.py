"""
FastAPI application exposing test runs over HTTP.

Routes:
- POST /api/run-test: Run the configured plan and return its result
- GET /api/results: Results retained in memory, oldest first
- GET /report: Most recent HTML report
- GET /health: Liveness probe
- /screenshots: Static screenshot files referenced by reports
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from ..config.settings import AppSettings, get_settings
from ..reporting.json_reporter import JsonReporter
from ..services.test_run_service import TestRunService

logger = logging.getLogger(__name__)

REPORT_URL = "/report"


def create_app(
    settings: Optional[AppSettings] = None,
    service: Optional[TestRunService] = None,
) -> FastAPI:
    """
    Build the HTTP app around a test run service.

    Args:
        settings: Application settings (process settings if omitted)
        service: Service to expose (built from settings if omitted)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    service = service or TestRunService(settings)
    json_reporter = JsonReporter()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.close()

    app = FastAPI(
        title="AI Web Tester",
        description="Automated browser tests with AI failure analysis",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service = service

    app.mount(
        "/screenshots",
        StaticFiles(directory=str(settings.screenshots_dir), check_dir=False),
        name="screenshots",
    )

    def get_service(request: Request) -> TestRunService:
        return request.app.state.service

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/run-test")
    async def run_test(request: Request) -> Dict[str, Any]:
        try:
            result = await get_service(request).run()
        except Exception as e:
            logger.exception("Test run failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
            )

        body = json_reporter.to_dict(result)
        body["html_report"] = REPORT_URL
        return body

    @app.get("/api/results")
    async def list_results(request: Request) -> List[Dict[str, Any]]:
        return [json_reporter.to_dict(r) for r in get_service(request).results.list()]

    @app.get(REPORT_URL)
    async def report(request: Request) -> FileResponse:
        latest = get_service(request).results.latest()
        if latest is None or not latest.report_path or not Path(latest.report_path).exists():
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No test report available"
            )
        return FileResponse(latest.report_path, media_type="text/html")

    return app
