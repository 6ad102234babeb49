"""
Logging setup.

Configured once per process by the CLI entry point; components receive a
bound logger and never touch sinks themselves.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}"
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[component]} | {message}"
)


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    """
    Replace loguru's default sink.

    Args:
        level: Console level
        log_file: Optional file that receives DEBUG and above
    """
    logger.remove()
    logger.configure(extra={"component": "-"})
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)
    if log_file is not None:
        logger.add(
            log_file,
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="1 MB",
            retention=3,
            enqueue=True,
        )
        logger.debug("Debug log opened at {}", log_file)
