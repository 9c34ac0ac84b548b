"""Logging configuration for searchvid."""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

FILE_LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """
    Configures logging for the application.

    Console output goes through rich to stderr so it does not interleave with
    the results screen. An optional rotating file captures everything at DEBUG.

    Args:
        verbose: Show INFO messages on the console instead of only warnings.
        log_file: Path of a log file, or None to disable file logging.
        max_bytes: Maximum size of a log file before rotation.
        backup_count: Number of backup log files to keep.
    """
    logger = logging.getLogger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(logging.DEBUG if log_file else console_level)

    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        log_time_format="[%X]",
    )
    rich_handler.setLevel(console_level)
    logger.addHandler(rich_handler)

    if log_file:
        log_file = os.path.expanduser(log_file)
        try:
            log_dir = os.path.dirname(os.path.abspath(log_file))
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=DATE_FORMAT))
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)
            logger.debug("File logging initialized: %s", log_file)
        except OSError as e:
            logger.error("Failed to set up file logging at %s: %s", log_file, e)
