"""Service layer: end-to-end test runs."""

from .test_run_service import ResultStore, TestRunService, build_analyzer

__all__ = [
    "ResultStore",
    "TestRunService",
    "build_analyzer",
]
