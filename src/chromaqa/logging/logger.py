"""Structured logging configuration for chromaqa using structlog.

Library modules log through the standard ``logging`` module and never
configure it. Applications opt in by calling ``setup_logging`` (or
``get_logger``), which wires those records through structlog's processor
chain. ``PerformanceLogger`` is a small timing helper for extraction phases.
"""

import logging
import sys
import threading
import time
from collections import deque
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
) -> None:
    """Configure structured logging for chromaqa.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )


_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    global _logging_initialized

    if _logging_initialized:
        return

    try:
        settings = get_settings()
        setup_logging(
            level="DEBUG" if settings.debug_mode else settings.log_level,
            log_file=settings.log_file,
            structured=settings.structured_logs and not settings.debug_mode,
            colorize=settings.debug_mode,
        )
    except (AttributeError, OSError, ValueError):
        # Invalid settings or unwritable log path
        setup_logging(level="INFO", structured=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.BoundLogger, structlog.get_logger(name))


class PerformanceLogger:
    """Logger for extraction phase timings.

    Only the most recent ``history`` durations are kept per operation. Timings
    go to a stdlib logger, so nothing here touches the host's logging setup;
    call :func:`setup_logging` explicitly to route them through structlog.
    """

    def __init__(self, base_logger: logging.Logger | None = None, history: int = 256) -> None:
        """Initialize performance logger.

        Args:
            base_logger: Logger that receives timing records
            history: Durations retained per operation for statistics
        """
        self.logger = base_logger or logging.getLogger(__name__)
        self.history = history
        self.metrics: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def log_timing(self, operation: str, duration: float, **kwargs) -> None:
        """Log operation timing.

        Args:
            operation: Operation name
            duration: Duration in seconds
            **kwargs: Additional context
        """
        with self._lock:
            if operation not in self.metrics:
                self.metrics[operation] = deque(maxlen=self.history)
            self.metrics[operation].append(duration)

        if self.logger.isEnabledFor(logging.DEBUG):
            context = " ".join(f"{key}={value}" for key, value in kwargs.items())
            self.logger.debug(f"{operation} took {duration:.4f}s {context}".rstrip())

    def timed(self, operation: str, **kwargs) -> "_Timer":
        """Context manager that logs the duration of its block."""
        return _Timer(self, operation, kwargs)

    def get_stats(self, operation: str | None = None) -> dict[str, Any]:
        """Get performance statistics over the retained durations.

        Args:
            operation: Optional specific operation

        Returns:
            Statistics dict
        """
        if operation:
            with self._lock:
                values = list(self.metrics.get(operation, ()))
            if not values:
                return {}
            return {
                "count": len(values),
                "mean": sum(values) / len(values),
                "min": min(values),
                "max": max(values),
                "total": sum(values),
            }

        with self._lock:
            operations = list(self.metrics)
        return {op: self.get_stats(op) for op in operations}


class _Timer:
    def __init__(self, perf: PerformanceLogger, operation: str, context: dict[str, Any]) -> None:
        self.perf = perf
        self.operation = operation
        self.context = context
        self.start = 0.0

    def __enter__(self) -> "_Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.perf.log_timing(self.operation, time.perf_counter() - self.start, **self.context)
