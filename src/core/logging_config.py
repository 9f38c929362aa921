"""Structured logging configuration.

This module initializes a logger with a stable structured format.
It prefers structlog and falls back to standard logging if absent.
The minimum level is INFO unless debug logging is switched on.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_STATE: dict[str, int] = {"level": logging.INFO}
_STANDARD_LOGGERS: list[logging.Logger] = []


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog or stdlib logger with structured output.
    """
    try:
        import structlog
    except ImportError:
        return _get_standard_logger(name)

    if not structlog.is_configured():
        _configure_structlog(structlog, _STATE["level"])
    return structlog.get_logger(name)


def configure_logging(debug: bool) -> None:
    """Set the minimum log level for every local-persist logger.

    Args:
        debug: Emit debug events when true, INFO and above otherwise.
    """
    level = logging.DEBUG if debug else logging.INFO
    _STATE["level"] = level
    for logger in _STANDARD_LOGGERS:
        logger.setLevel(level)
    try:
        import structlog
    except ImportError:
        return
    _configure_structlog(structlog, level)


def _configure_structlog(structlog: Any, level: int) -> None:
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _get_standard_logger(name: str) -> Any:
    """Create a stdlib logger fallback.

    Args:
        name: Logger name.

    Returns:
        Configured standard logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_STATE["level"])
        _STANDARD_LOGGERS.append(logger)
    return _StructuredStandardLogger(logger)


class _StructuredStandardLogger:
    """Stdlib logger adapter that accepts structured keyword fields."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(self, event: str, **fields: object) -> None:
        """Log a debug-level structured event."""
        self._logger.debug(_format_event(event, fields))

    def info(self, event: str, **fields: object) -> None:
        """Log an info-level structured event."""
        self._logger.info(_format_event(event, fields))

    def warning(self, event: str, **fields: object) -> None:
        """Log a warning-level structured event."""
        self._logger.warning(_format_event(event, fields))

    def error(self, event: str, **fields: object) -> None:
        """Log an error-level structured event."""
        self._logger.error(_format_event(event, fields))


def _format_event(event: str, fields: dict[str, object]) -> str:
    """Render a structured event line for standard logging.

    Args:
        event: Event name.
        fields: Event fields.

    Returns:
        JSON-encoded event string.
    """
    if not fields:
        return event
    payload = {"event": event, **fields}
    return json.dumps(payload, sort_keys=True, default=str)
