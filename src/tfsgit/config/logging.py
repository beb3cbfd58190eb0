"""Logging configuration using structlog."""

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(log_level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure structlog to render human-readable lines.

    Progress goes to stdout by default; errors that end the run are echoed
    to stderr by the CLI.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )
