"""AI analysis of test failures.

The orchestrator depends only on the ErrorAnalyzer interface. LLMErrorAnalyzer
asks a chat model to explain a recorded error; it can also summarize a
finished run for the report.
"""

import json
import logging
from abc import ABC, abstractmethod

from .base import BaseLLM, APIError, RateLimitError, ValidationError
from ..models.run_models import ErrorRecord, RunState

logger = logging.getLogger(__name__)

ERROR_SYSTEM_PROMPT = (
    "You are a web testing expert. Analyze the following error and provide insights."
)
SUMMARY_SYSTEM_PROMPT = "You are a QA testing expert analyzing website test results."
SUMMARY_UNAVAILABLE = "Run summary unavailable"


class AnalysisError(Exception):
    """Raised when an analysis cannot be produced."""

    pass


class ErrorAnalyzer(ABC):
    """Capability that explains a recorded test error."""

    @abstractmethod
    async def analyze(self, error: ErrorRecord) -> str:
        """
        Explain an error and suggest what to check next.

        Args:
            error: The recorded error

        Returns:
            Analysis text

        Raises:
            AnalysisError: If no analysis could be produced
        """
        pass

    async def summarize_run(self, state: RunState) -> str:
        """
        Describe a finished run. Optional; the default cannot summarize.

        Raises:
            AnalysisError: If no summary could be produced
        """
        raise AnalysisError(f"{type(self).__name__} does not summarize runs")

    async def close(self) -> None:
        """Release resources held by the analyzer."""
        pass


class DisabledErrorAnalyzer(ErrorAnalyzer):
    """Analyzer used when no model is configured. Always fails."""

    def __init__(self, reason: str = "no OpenAI API key configured"):
        self.reason = reason

    async def analyze(self, error: ErrorRecord) -> str:
        raise AnalysisError(f"AI analysis disabled: {self.reason}")


class LLMErrorAnalyzer(ErrorAnalyzer):
    """
    Explain test errors with a chat model.

    PATTERN: Provider errors are wrapped in AnalysisError so callers handle a
        single failure type
    """

    def __init__(self, provider: BaseLLM):
        """
        Args:
            provider: Chat model provider
        """
        self.provider = provider

    async def analyze(self, error: ErrorRecord) -> str:
        messages = [
            {"role": "system", "content": ERROR_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": (
                    "Analyze this testing error and provide recommendations: "
                    f"{json.dumps(error.model_dump(mode='json'))}"
                ),
            },
        ]
        logger.debug(f"Requesting analysis for step '{error.step}'")
        return await self._generate(messages)

    async def summarize_run(self, state: RunState) -> str:
        """
        Describe a finished run: what was done, what failed and what it means.

        Args:
            state: Exported run state

        Returns:
            Summary text

        Raises:
            AnalysisError: If the model call fails
        """
        failed = state.failed_steps
        prompt = (
            "Analyze this website test result:\n"
            f"Steps performed: {', '.join(state.step_names) or 'none'}\n"
            f"Failed steps: {', '.join(failed) or 'none'}\n"
        )
        if state.artifacts.errors:
            prompt += "Errors: " + "; ".join(e.error for e in state.artifacts.errors) + "\n"
        prompt += (
            "\nGenerate a brief, professional description of the test results, "
            "explaining why the test failed (if it did) and what it means for "
            "the website's functionality."
        )

        return await self._generate(
            [
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ]
        )

    async def _generate(self, messages) -> str:
        try:
            content = await self.provider.agenerate(messages)
        except (APIError, RateLimitError, ValidationError) as e:
            raise AnalysisError(str(e)) from e

        if not content.strip():
            raise AnalysisError("Model returned an empty analysis")
        return content.strip()

    async def close(self) -> None:
        await self.provider.close()
