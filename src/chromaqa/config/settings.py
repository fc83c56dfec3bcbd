"""Configuration management for chromaqa using pydantic-settings.

Defaults for every extraction knob live here so callers can tune sampling,
region detection and logging through environment variables or a .env file.
"""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChromaQASettings(BaseSettings):
    """Main configuration settings for the extraction engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CHROMAQA_",
        case_sensitive=False,
        extra="forbid",
    )

    # Histogram sampling
    sample_rate: int = Field(4, ge=1, description="Sample every Nth pixel on both axes")
    max_colors: int = Field(64, ge=1, description="Maximum colors returned per extraction")
    merge_delta_e: float = Field(
        0.0,
        ge=0.0,
        description="Merge extracted colors closer than this CIEDE2000 distance (0 disables)",
    )

    # Region detection
    tolerance: float = Field(10.0, ge=0.0, description="Euclidean RGB tolerance for color masks")
    min_region_percent: float = Field(
        0.1, ge=0.0, le=100.0, description="Minimum region size as percent of the image"
    )
    max_dimension: int = Field(
        500, ge=1, description="Longer image side is downscaled to this before locating colors"
    )

    # Typography
    text_preview_length: int = Field(50, ge=1, description="Characters kept in text previews")

    # Call-level parallelism
    max_workers: int = Field(4, ge=1, description="Worker threads used by extract_many")

    # Logging
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field("INFO", description="Log level when debug mode is off")
    log_file: Path | None = Field(None, description="Optional log file path")
    structured_logs: bool = Field(True, description="Render logs as JSON")


class TestSettings(ChromaQASettings):
    """Test-specific settings."""

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="CHROMAQA_")

    debug_mode: bool = True
    structured_logs: bool = False


# Singleton instance
_settings: ChromaQASettings | None = None


def get_settings(env: str | None = None) -> ChromaQASettings:
    """Get the singleton settings instance.

    Args:
        env: Environment name ('test' or None for the default)

    Returns:
        ChromaQASettings instance
    """
    global _settings

    if _settings is None:
        env_name = env or os.getenv("CHROMAQA_ENV", "default")
        if env_name == "test":
            _settings = TestSettings()
        else:
            _settings = ChromaQASettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
