"""Logging configuration for the docs gate.

This module provides logging configuration with support for:
- JSON formatted logs for production
- Human-readable logs for development
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes passed through ``extra=`` that formatters render when present
CONTEXT_FIELDS = (
    "request_id",
    "route",
    "method",
    "status_code",
    "latency_ms",
    "client_ip",
    "reason",
    "entry",
    "ui_path",
    "doc_path",
    "protect_doc_json",
)


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter.

    Outputs log records as JSON objects suitable for log aggregation systems.
    """

    def __init__(self, *, include_timestamp: bool = True, include_level: bool = True) -> None:
        """Initialize the formatter.

        Args:
            include_timestamp: Whether to include timestamp in output
            include_level: Whether to include log level in output
        """
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON formatted log string
        """
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
        }

        if self.include_timestamp:
            log_data["timestamp"] = datetime.now(UTC).isoformat()

        if self.include_level:
            log_data["level"] = record.levelname

        log_data["logger"] = record.name
        log_data.update(_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = f"{record.filename}:{record.lineno}"

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable log formatter for development.

    Uses colors and indentation for easier reading in terminals.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
        color = self.COLORS.get(record.levelname, "")
        level = f"{color}{record.levelname:8}{self.RESET}"

        parts = [f"[{timestamp}] {level} {record.name}: {record.getMessage()}"]

        extra_parts = [f"{key}={value}" for key, value in _context(record).items()]
        if extra_parts:
            parts.append("  " + " ".join(extra_parts))

        if record.exc_info:
            parts.append(self.formatException(record.exc_info))

        return "\n".join(parts)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    loggers: list[str] | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON structured logging
        loggers: Additional loggers to configure
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter() if json_format else HumanReadableFormatter())
    root_logger.addHandler(handler)

    loggers_to_configure = ["docs_gate", "uvicorn"]
    if loggers:
        loggers_to_configure.extend(loggers)

    for logger_name in loggers_to_configure:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Don't propagate to root to avoid duplicate logs
        logger.propagate = False
        for existing in logger.handlers[:]:
            logger.removeHandler(existing)
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
