"""Base LLM provider abstraction."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from ..models.llm_models import ModelConfig

logger = logging.getLogger(__name__)


class BaseLLM(ABC):
    """
    Abstract base class for chat model providers.

    Providers implement async generation and raise the errors defined in
    this module.
    """

    def __init__(self, config: ModelConfig):
        """
        Initialize LLM provider.

        Args:
            config: Model configuration
        """
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{config.model_name}")

    @abstractmethod
    async def agenerate(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs: Any,
    ) -> str:
        """
        Generate a response asynchronously.

        Args:
            messages: Chat messages in OpenAI format
            max_tokens: Maximum tokens to generate (config default if omitted)
            temperature: Sampling temperature (config default if omitted)
            **kwargs: Additional provider-specific parameters

        Returns:
            Generated text response

        Raises:
            RateLimitError: When rate limited
            APIError: On API failures
            ValidationError: On invalid inputs
        """
        pass

    @abstractmethod
    def get_num_tokens(self, text: str) -> int:
        """
        Count tokens in text.

        Args:
            text: Text to count tokens for

        Returns:
            Number of tokens
        """
        pass

    def validate_request(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
    ) -> int:
        """
        Check a request against the model's context window.

        Args:
            messages: Chat messages
            max_tokens: Maximum tokens to generate

        Returns:
            Total tokens the request may use

        Raises:
            ValidationError: If the request does not fit the context window
        """
        total_tokens = sum(
            self.get_num_tokens(msg.get("content", ""))
            for msg in messages
        )
        total_tokens += max_tokens or self.config.max_tokens

        if total_tokens > self.config.context_window:
            raise ValidationError(
                f"Request exceeds context window: {total_tokens} > "
                f"{self.config.context_window}"
            )

        self.logger.debug(f"Request validated: {total_tokens} tokens")
        return total_tokens

    async def close(self) -> None:
        """Release provider resources."""
        pass


class RateLimitError(Exception):
    """Raised when rate limited by provider."""

    pass


class APIError(Exception):
    """Raised on API failures."""

    pass


class ValidationError(Exception):
    """Raised on validation failures."""

    pass
