"""Logging utilities with rich output for the howold CLI.

Everything is written to stderr so stdout stays free for scripting.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("Fetching tree...")
    logger.warning("Rate limited, waiting 60s...")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# Global stderr console shared by logging and the display layer
console = Console(stderr=True)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to WARNING.

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger(__name__, level="DEBUG")
        >>> logger.debug("Detailed info")
        DEBUG    Detailed info
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")

    logger.setLevel(level.upper())

    rich_handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=True,
    )
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    # Allow propagation for test frameworks (pytest caplog)
    logger.propagate = True

    return logger


def warning(message: str) -> None:
    """Print a warning line with a yellow warning icon.

    Example:
        >>> warning("No templates found")
          ⚠ No templates found
    """
    console.print(f"  [yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    """Print an error line with a red cross. The message is printed literally.

    Example:
        >>> error("GitHub API: 404 Not Found")
          ✖ GitHub API: 404 Not Found
    """
    console.print(f"\n  [red]✖[/red] {escape(message)}\n", highlight=False)
