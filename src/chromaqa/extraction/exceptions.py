"""
Exception types for color and typography extraction.

Extraction degrades gracefully almost everywhere; the decode boundary is the
one place where failure is surfaced, so callers can tell a corrupt image
apart from an empty one.
"""

from ..base_exceptions import ChromaQAException


class ExtractionError(ChromaQAException):
    """Base exception for extraction errors."""

    pass


class ImageDecodeError(ExtractionError):
    """Raised when image bytes cannot be rasterized into a pixel buffer."""

    def __init__(self, message: str, size: int | None = None) -> None:
        super().__init__(
            message,
            error_code="DECODE_FAILED",
            context={"size": size} if size is not None else None,
        )
