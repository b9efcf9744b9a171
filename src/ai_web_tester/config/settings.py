"""Application configuration with environment variable loading."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv

from ..models.llm_models import ModelConfig

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class AppSettings(BaseModel):
    """Configuration for test runs, AI analysis and the HTTP server."""

    # OpenAI Configuration
    openai_api_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY"),
        description="OpenAI API key",
    )
    openai_model: str = Field(
        default_factory=lambda: os.getenv("OPENAI_MODEL", "gpt-4"),
        description="Model used for error analysis",
    )
    openai_base_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL"),
        description="Alternative OpenAI-compatible endpoint",
    )
    analysis_max_tokens: int = Field(
        default_factory=lambda: int(os.getenv("ANALYSIS_MAX_TOKENS", "500")),
        description="Maximum tokens per analysis",
    )
    analysis_temperature: float = Field(
        default_factory=lambda: float(os.getenv("ANALYSIS_TEMPERATURE", "0.7")),
        description="Sampling temperature for analysis",
    )

    # Test Target
    target_url: str = Field(
        default_factory=lambda: os.getenv("TARGET_URL", "https://video-converter.com/"),
        description="Page under test",
    )
    input_value: str = Field(
        default_factory=lambda: os.getenv(
            "INPUT_VALUE", "https://www.youtube.com/watch?v=aWk2XZ_8IhA"
        ),
        description="Value typed into the page's URL input",
    )

    # Browser
    headless: bool = Field(
        default_factory=lambda: _env_bool("HEADLESS", "true"),
        description="Run the browser headless",
    )
    browser_type: str = Field(
        default_factory=lambda: os.getenv("BROWSER_TYPE", "chromium"),
        description="Playwright browser engine",
    )
    navigation_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("NAVIGATION_TIMEOUT_MS", "10000")),
        description="Navigation timeout in milliseconds",
    )

    # Artifacts
    screenshots_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("SCREENSHOTS_DIR", "screenshots")),
        description="Directory for screenshots",
    )
    report_path: Path = Field(
        default_factory=lambda: Path(os.getenv("REPORT_PATH", "test-report.html")),
        description="Where the HTML report is written",
    )
    report_timezone: str = Field(
        default_factory=lambda: os.getenv("REPORT_TIMEZONE", "Asia/Jakarta"),
        description="Timezone for report timestamps",
    )
    max_retained_results: int = Field(
        default_factory=lambda: int(os.getenv("MAX_RETAINED_RESULTS", "20")),
        ge=1,
        description="Results kept in memory by the server",
    )

    # HTTP Server
    host: str = Field(
        default_factory=lambda: os.getenv("HOST", "127.0.0.1"),
        description="Bind address",
    )
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "3001")),
        description="Bind port",
    )

    def analysis_model_config(self) -> ModelConfig:
        """Model configuration for the error analyzer."""
        return ModelConfig(
            model_name=self.openai_model,
            api_endpoint=self.openai_base_url,
            max_tokens=self.analysis_max_tokens,
            temperature=self.analysis_temperature,
        )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Process-wide settings instance."""
    return AppSettings()
