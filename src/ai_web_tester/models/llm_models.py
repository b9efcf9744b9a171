"""LLM-related data models."""

from pydantic import BaseModel, Field
from typing import Optional


class ModelConfig(BaseModel):
    """Configuration for the chat model used for analysis."""

    model_name: str = Field(description="Model identifier")
    api_endpoint: Optional[str] = Field(default=None, description="API endpoint override")
    max_tokens: int = Field(default=500, description="Max tokens to generate")
    temperature: float = Field(default=0.7, ge=0, le=2, description="Sampling temperature")
    context_window: int = Field(default=8192, description="Context window size")

    class Config:
        """Pydantic configuration."""

        protected_namespaces = ()
