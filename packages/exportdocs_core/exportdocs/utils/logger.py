"""
Logging setup for the export document engine.

Modules log through ``logging.getLogger(__name__)``; applications and the
CLI call ``configure_logging`` once to install a handler.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    rich_output: bool = True,
    format_string: Optional[str] = None,
    logger_name: str = "exportdocs",
) -> logging.Logger:
    """
    Configure logging for the ``exportdocs`` logger tree.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rich_output: Use a rich console handler instead of a plain stream
        format_string: Custom format string for the plain handler
        logger_name: Root of the logger tree to configure

    Returns:
        The configured logger
    """
    if level.upper() not in LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(format_string or PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(handler)
    return logger
