"""Logging configuration for voxelsculpt.

Provides consistent structured logging setup across the application.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, List

import structlog


def configure_logging(
    level: str = "INFO",
    enable_colors: bool = True,
    enable_json: bool = False,
    extra_processors: List[Any] | None = None,
) -> None:
    """Configure structured logging for voxelsculpt.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        enable_colors: Enable colored output for console
        enable_json: Use JSON output format
        extra_processors: Additional structlog processors
    """
    level_value = LOG_LEVELS.get(level.upper())
    if level_value is None:
        raise ValueError(f"Unknown log level: {level}")

    # Set standard library logging level
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level_value,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if extra_processors:
        processors.extend(extra_processors)

    if enable_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=enable_colors and sys.stderr.isatty())
        )

    # Log lines go to stderr so command output on stdout stays clean
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Default configuration for different environments
CONFIGS = {
    "development": {
        "level": "DEBUG",
        "enable_colors": True,
        "enable_json": False,
    },
    "production": {
        "level": "INFO",
        "enable_colors": False,
        "enable_json": True,
    },
    "testing": {
        "level": "WARNING",
        "enable_colors": False,
        "enable_json": False,
    },
}


def configure_profile(profile: str) -> None:
    """Apply one of the named presets in CONFIGS.

    Raises:
        ValueError: If the profile name is unknown
    """
    if profile not in CONFIGS:
        valid = ", ".join(sorted(CONFIGS))
        raise ValueError(f"Unknown logging profile: {profile}. Use one of: {valid}")
    configure_logging(**CONFIGS[profile])
