"""Configuration package.

Provides pydantic-based settings with environment variable support.

Usage:
    from chromaqa.config import get_settings

    settings = get_settings()
    settings.max_dimension
"""

from .settings import ChromaQASettings, TestSettings, get_settings, reset_settings

__all__ = [
    "ChromaQASettings",
    "TestSettings",
    "get_settings",
    "reset_settings",
]
