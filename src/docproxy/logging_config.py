import logging
import sys
from pathlib import Path
from typing import Optional, Union

from rich.logging import RichHandler

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
    rich_console: bool = False,
) -> logging.Logger:
    """
    Configure the ``docproxy`` logger.

    Console output goes to stdout, through rich when ``rich_console`` is
    set (the CLI does this) and as plain formatted lines otherwise. The
    file handler, when requested, always uses the plain format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist
        rich_console: Render console records with rich

    Returns:
        Configured logger instance
    """
    format_string = format_string or DEFAULT_FORMAT

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("docproxy")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()

        console_handler: logging.Handler
        if rich_console:
            console_handler = RichHandler(show_path=False, markup=False)
            console_handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(format_string))
        console_handler.setLevel(numeric_level)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(file_handler)

    # mitmproxy and playwright log through their own loggers
    logger.propagate = False

    return logger
