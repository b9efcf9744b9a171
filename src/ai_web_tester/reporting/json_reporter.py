"""JSON report generator for test runs."""

import json
import logging
from typing import Any, Dict

from ..models.run_models import RunResult

logger = logging.getLogger(__name__)


class JsonReporter:
    """
    Generate JSON reports for API consumption.

    GOTCHA: Datetimes and enums are serialized through pydantic's JSON mode
    """

    def __init__(self, pretty: bool = True):
        """
        Args:
            pretty: Whether to pretty-print JSON output
        """
        self.pretty = pretty

    def to_dict(self, result: RunResult) -> Dict[str, Any]:
        """Convert a run result to JSON-compatible data with derived fields."""
        data = result.model_dump(mode="json")
        data["status"] = result.status.value if result.status else None
        data["failed_steps"] = result.state.failed_steps
        data["duration_seconds"] = result.state.duration_seconds
        return data

    def generate_report(self, result: RunResult) -> str:
        """
        Generate JSON report from a run result.

        Returns:
            JSON string
        """
        json_str = json.dumps(self.to_dict(result), indent=2 if self.pretty else None)
        logger.debug(f"JSON report generated ({len(json_str)} bytes)")
        return json_str
