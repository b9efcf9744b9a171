"""LLM subsystem: chat model providers and failure analysis."""

from .base import BaseLLM, APIError, RateLimitError, ValidationError
from .analyzer import (
    AnalysisError,
    ErrorAnalyzer,
    DisabledErrorAnalyzer,
    LLMErrorAnalyzer,
    SUMMARY_UNAVAILABLE,
)

__all__ = [
    "BaseLLM",
    "APIError",
    "RateLimitError",
    "ValidationError",
    "AnalysisError",
    "ErrorAnalyzer",
    "DisabledErrorAnalyzer",
    "LLMErrorAnalyzer",
    "SUMMARY_UNAVAILABLE",
]
