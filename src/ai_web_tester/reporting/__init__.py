"""Report renderers over exported run state."""

from .html_reporter import HtmlReporter, FAILURE_RECOMMENDATIONS
from .json_reporter import JsonReporter

__all__ = [
    "HtmlReporter",
    "FAILURE_RECOMMENDATIONS",
    "JsonReporter",
]
