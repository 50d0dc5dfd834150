"""Logging configuration using structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(verbose: bool = False, json_output: bool | None = None) -> None:
    """Configure structlog on top of the standard logging module.

    Args:
        verbose: If True, show DEBUG level logs. Otherwise, show WARNING and above
            so dashboard output stays readable.
        json_output: Render log lines as JSON. Defaults to the
            ``PULSE_LOG_FORMAT=json`` environment setting.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    if json_output is None:
        json_output = os.environ.get("PULSE_LOG_FORMAT", "").lower() == "json"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(json_output),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for the given name."""
    return structlog.get_logger(name)
