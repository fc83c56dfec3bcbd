"""Root of the chromaqa error hierarchy.

Extraction degrades to empty results wherever it can, so the few errors that
do escape carry a stable ``error_code`` that callers can branch on and a
``context`` dict describing the failing input.
"""

from typing import Any


class ChromaQAException(Exception):
    """Raised by chromaqa when an asset cannot be processed at all.

    Attributes:
        message: What went wrong, suitable for showing in a QA report
        error_code: Stable code such as ``"DECODE_FAILED"``
        context: Details about the input, e.g. its size in bytes
    """

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Prefix the message with the error code when there is one."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message
