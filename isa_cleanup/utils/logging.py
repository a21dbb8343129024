"""Logging configuration for isa-cleanup.

Library modules log through ``loguru.logger`` and never add sinks; the CLI
calls setup_logging() once at startup.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_output: bool = False,
) -> None:
    """Configure logging sinks.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, ...)
        log_file: Optional file path for log output
        json_output: If True, stderr records are serialized as JSON
    """
    logger.remove()

    if json_output:
        logger.add(sys.stderr, format="{message}", level=level, serialize=True)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<level>{message}</level>"
            ),
            level=level,
            colorize=True,
        )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level,
        )
