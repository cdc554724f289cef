"""Structured logging configuration using structlog.

JSON output for log aggregation in production, coloured console output for
development.

Usage::

    from pharmarisk.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("batch_scored", batch_number="A93KD881", risk_level="potential_risk")
    # Output: {"event": "batch_scored", "batch_number": "A93KD881", ..., "timestamp": "..."}
"""

import logging
import sys
from typing import Any, TextIO

import structlog


def setup_logging(json_logs: bool = False, log_level: str = "INFO", stream: TextIO = sys.stdout) -> None:
    """Configure structured logging for the application.

    Args:
        json_logs: If True, output JSON format. If False, use human-readable format.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        stream: Where log lines go; the CLI sends them to stderr so stdout stays JSON.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    common_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=common_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the module.

    Returns:
        Structured logger instance with bound context.
    """
    return structlog.get_logger(name)
