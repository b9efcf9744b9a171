"""Declared test plans."""

from .url_input import (
    DEFAULT_URL_SELECTORS,
    CHECK_AVAILABILITY,
    ANALYZE_STRUCTURE,
    FILL_URL_INPUT,
    build_url_input_plan,
)

__all__ = [
    "DEFAULT_URL_SELECTORS",
    "CHECK_AVAILABILITY",
    "ANALYZE_STRUCTURE",
    "FILL_URL_INPUT",
    "build_url_input_plan",
]
